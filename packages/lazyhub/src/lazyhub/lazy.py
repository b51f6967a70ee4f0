"""
Lazy entity state.

A LazyEntity exists before its data does. It is created either pending, with
an async loader producing the raw fields, or pre-resolved from fields already
at hand. `await_ready` is the single synchronisation point: however many
callers await it, at most one population task runs per entity.

Entity kinds do not subclass this; each holds one LazyEntity and forwards to
it (see handle.Handle).
"""

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import HubError

logger = logging.getLogger(__name__)

DataT = TypeVar("DataT", bound=BaseModel)
T = TypeVar("T")

Loader = Callable[[], Awaitable[Any]]


class SlotState(enum.Enum):
    ABSENT = "absent"
    LOADING = "loading"
    RESOLVED = "resolved"


@dataclass
class Slot:
    """Memo slot of one accessor on one entity."""

    state: SlotState = SlotState.ABSENT
    task: asyncio.Future | None = None
    value: Any = None


class LazyEntity(Generic[DataT]):
    """Readiness, single-flight population and accessor memo slots for one entity."""

    def __init__(self, schema: type[DataT], loader: Loader | None = None, data: DataT | None = None):
        self.schema = schema
        self.data: DataT = data if data is not None else schema()
        self._loader = loader
        self._ready = loader is None
        self._failed = False
        self._task: asyncio.Future | None = None
        self._slots: dict[str, Slot] = {}
        self._start_in_background()

    @classmethod
    def pending(cls, schema: type[DataT], loader: Loader) -> "LazyEntity[DataT]":
        return cls(schema, loader=loader)

    @classmethod
    def resolved(cls, schema: type[DataT], payload: Any) -> "LazyEntity[DataT]":
        """Build a ready entity; payload is a mapping or an instance of schema."""
        if isinstance(payload, schema):
            return cls(schema, data=payload)
        return cls(schema, data=schema.model_validate(payload))

    @property
    def failed(self) -> bool:
        """True once population failed; the entity then never becomes ready."""
        return self._failed

    def is_ready(self) -> bool:
        return self._ready

    def _start_in_background(self) -> None:
        # Outside an event loop the load starts on the first await_ready().
        if self._ready:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return
        self._task = asyncio.ensure_future(self._populate())

    async def await_ready(self) -> "LazyEntity[DataT]":
        """
        Wait until the fields are populated.

        Concurrent callers share one population task; a caller being
        cancelled does not cancel it.

        Returns:
            self, populated unless population failed
        """
        if self._ready or self._failed:
            return self
        if self._task is None:
            self._task = asyncio.ensure_future(self._populate())
        await asyncio.shield(self._task)
        return self

    async def _populate(self) -> None:
        try:
            payload = await self._loader()
            if payload is None:
                raise HubError(f"no data for {self.schema.__name__}")
            self.merge(payload)
            self._ready = True
        except (HubError, ValidationError) as e:
            self._failed = True
            logger.warning("Failed to load %s: %s", self.schema.__name__, e)
        finally:
            self._task = None

    def merge(self, payload: Any) -> None:
        """Overwrite fields with those present in payload; others stay untouched."""
        parsed = self.schema.model_validate(payload)
        updates = {name: getattr(parsed, name) for name in parsed.model_fields_set}
        if parsed.model_extra:
            updates.update(parsed.model_extra)
        self.data = self.data.model_copy(update=updates)

    def slot(self, name: str) -> Slot:
        return self._slots.setdefault(name, Slot())

    async def memoize(
        self,
        name: str,
        compute: Callable[[], Awaitable[T]],
        empty: Callable[[], T],
    ) -> T:
        """
        Run an accessor lookup at most once and cache its result.

        The in-flight task is stored in the slot before it resolves, so
        concurrent callers share it. A failed lookup is logged, leaves the slot
        absent and yields empty().

        Args:
            name: Accessor name
            compute: Coroutine function producing the value
            empty: Factory for the degraded result

        Returns:
            The resolved value or empty()
        """
        slot = self.slot(name)
        if slot.state is SlotState.RESOLVED:
            return slot.value
        if slot.state is SlotState.ABSENT:
            slot.state = SlotState.LOADING
            slot.task = asyncio.ensure_future(self._resolve(slot, name, compute, empty))
        return await asyncio.shield(slot.task)

    async def _resolve(
        self,
        slot: Slot,
        name: str,
        compute: Callable[[], Awaitable[T]],
        empty: Callable[[], T],
    ) -> T:
        try:
            value = await compute()
        except (HubError, ValidationError) as e:
            logger.warning("%s.%s degraded to empty: %s", self.schema.__name__, name, e)
            slot.state = SlotState.ABSENT
            slot.task = None
            return empty()
        except Exception:
            logger.exception("%s.%s failed unexpectedly, degraded to empty", self.schema.__name__, name)
            slot.state = SlotState.ABSENT
            slot.task = None
            return empty()
        slot.state = SlotState.RESOLVED
        slot.value = value
        slot.task = None
        return value

    def __repr__(self) -> str:
        state = "ready" if self._ready else "failed" if self._failed else "pending"
        return f"<LazyEntity {self.schema.__name__} {state}>"
