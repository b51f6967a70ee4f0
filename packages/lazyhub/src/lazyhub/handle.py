"""Common surface of entity handles."""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic

from .errors import MissingDataError
from .lazy import DataT, LazyEntity

if TYPE_CHECKING:
    from .hub import Hub


class Handle(Generic[DataT]):
    """
    A typed entity kind wrapping one LazyEntity.

    Remote fields are readable as attributes (`repo.full_name`); they are
    None until the handle is ready.
    """

    def __init__(self, hub: "Hub", lazy: LazyEntity[DataT]):
        self._hub = hub
        self._lazy = lazy

    @property
    def data(self) -> DataT:
        return self._lazy.data

    @property
    def failed(self) -> bool:
        return self._lazy.failed

    def is_ready(self) -> bool:
        return self._lazy.is_ready()

    async def await_ready(self):
        """Wait for population and return this handle."""
        await self._lazy.await_ready()
        return self

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._lazy.data, name)

    async def _fetch_list(self, url: str | None, what: str) -> list[Any]:
        """GET a list payload, raising MissingDataError when there is none."""
        items = await self._hub.requester.fetch(url)
        if not isinstance(items, list):
            raise MissingDataError(f"no {what} for {self._label()}")
        return items

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._label()} {self._lazy!r}>"

    def _label(self) -> str:
        return str(getattr(self.data, "id", None))


async def identify(user: Any) -> str | None:
    """
    Stringified id of an account given in any accepted form.

    Accepts a handle (awaited first), a mapping or object with an `id`, or a
    raw id. Ids are compared as strings so 42 and "42" match.
    """
    if isinstance(user, Handle):
        await user.await_ready()
        value = user.data.id
    elif isinstance(user, Mapping):
        value = user.get("id")
    elif hasattr(user, "id"):
        value = user.id
    else:
        value = user
    return None if value is None else str(value)
