"""In-memory identity and request stores shared by a Hub."""

import logging
from dataclasses import dataclass, field
from typing import Generic, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class StoreStats:
    """Lookup statistics tracked by every store."""

    hit: int = 0
    miss: int = 0
    write: int = 0


class Store(Generic[T]):
    """A string-keyed map with insert-if-absent support and hit/miss counters."""

    def __init__(self, name: str):
        self.name = name
        self._data: dict[str, T] = {}
        self.stats = StoreStats()

    def get(self, key: str) -> T | None:
        value = self._data.get(key)
        if value is None:
            self.stats.miss += 1
        else:
            self.stats.hit += 1
        return value

    def put(self, key: str, value: T) -> None:
        self._data[key] = value
        self.stats.write += 1

    def setdefault(self, key: str, value: T) -> T:
        """Bind key to value unless already bound; return the bound value."""
        existing = self._data.get(key)
        if existing is not None:
            return existing
        self.put(key, value)
        return value

    def has(self, key: str) -> bool:
        return key in self._data

    def clear(self) -> None:
        logger.debug("Clearing %s store (%d entries)", self.name, len(self._data))
        self._data.clear()

    def keys(self) -> list[str]:
        return list(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)


@dataclass
class HubCache:
    """
    Process-wide state of a Hub.

    accounts, repositories and gists hold the canonical entity handles
    (users and organizations share the accounts store). requests holds
    decoded payloads of parameterless GETs.
    """

    accounts: Store = field(default_factory=lambda: Store("accounts"))
    repositories: Store = field(default_factory=lambda: Store("repositories"))
    gists: Store = field(default_factory=lambda: Store("gists"))
    requests: Store = field(default_factory=lambda: Store("requests"))

    def clear(self) -> None:
        for store in (self.accounts, self.repositories, self.gists, self.requests):
            store.clear()
