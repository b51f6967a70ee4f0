"""
Entry point: the factory handing out canonical entity handles.

`get_*` returns a handle immediately; its data loads in the background and
`await_ready()` waits for it. `create_*` wraps data already at hand, e.g. an
entity embedded in another response.

    hub = Hub()
    user = hub.get_user_by_name("octocat")
    repos = await user.get_repositories()
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from .accounts import Account
from .cache import HubCache, Store
from .config import HubConfig
from .events import Event
from .files import File
from .gists import Gist
from .handle import Handle
from .lazy import Loader, LazyEntity
from .models import AccountData, EventData, FileData, GistData, Release, RepositoryData
from .repositories import Repository
from .requester import Requester
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

H = TypeVar("H", bound=Handle)


def _is_numeric(identifier: int | str) -> bool:
    return isinstance(identifier, int) or str(identifier).isdigit()


def _account_keys(data: Mapping[str, Any]) -> list[str]:
    return [str(key) for key in (data.get("id"), data.get("login")) if key is not None]


def _repository_keys(data: Mapping[str, Any]) -> list[str]:
    return [str(key) for key in (data.get("id"), data.get("full_name")) if key is not None]


def _gist_keys(data: Mapping[str, Any]) -> list[str]:
    return [str(data["id"])] if data.get("id") is not None else []


class Hub:
    """
    Factory and identity cache for GitHub entities.

    With `config.cache_objects` on, every logical entity has one handle:
    lookups by id, login or full name all reach the same instance.
    """

    def __init__(
        self,
        config: HubConfig | None = None,
        cache: HubCache | None = None,
        transport: Transport | None = None,
    ):
        """
        Initialize hub.

        Args:
            config: Settings (defaults to HubConfig.from_env())
            cache: Identity and request stores (a fresh HubCache by default)
            transport: GET implementation (HttpxTransport by default)
        """
        self.config = config or HubConfig.from_env()
        self.cache = cache or HubCache()
        self.transport = transport or HttpxTransport(self.config)
        self.requester = Requester(self.config, self.transport, self.cache.requests)
        logger.info("Hub ready, api_url=%s", self.config.api_url)

    # ============ Lookup ============

    def _lookup(
        self,
        store: Store,
        key: str,
        path: str,
        build: Callable[[Loader], H],
        keys_of: Callable[[Mapping[str, Any]], list[str]],
    ) -> H:
        if self.config.cache_objects:
            existing = store.get(key)
            if existing is not None:
                logger.debug("Identity cache hit: %s %s", store.name, key)
                return existing

        async def load() -> Any:
            payload = await self.requester.fetch(path)
            if isinstance(payload, Mapping) and self.config.cache_objects:
                # Reachable by its other keys too, unless those already name a handle.
                for alias in keys_of(payload):
                    store.setdefault(alias, handle)
            return payload

        handle = build(load)
        if self.config.cache_objects:
            store.put(key, handle)
        logger.debug("Created pending %s handle for %s", store.name, key)
        return handle

    def _register(self, store: Store, handle: Handle, keys: Iterable[str]) -> None:
        if not self.config.cache_objects:
            return
        for key in keys:
            store.put(key, handle)

    def get_user(self, identifier: int | str) -> Account:
        """
        User by numeric id or login.

        Args:
            identifier: Numeric id (int or digit string) or login

        Returns:
            Account handle, possibly still loading
        """
        key = str(identifier)
        path = f"/user/{key}" if _is_numeric(identifier) else f"/users/{key}"
        return self._lookup(
            self.cache.accounts,
            key,
            path,
            lambda loader: Account(self, LazyEntity.pending(AccountData, loader)),
            _account_keys,
        )

    def get_user_by_name(self, login: str) -> Account:
        return self._lookup(
            self.cache.accounts,
            login,
            f"/users/{login}",
            lambda loader: Account(self, LazyEntity.pending(AccountData, loader)),
            _account_keys,
        )

    def get_organization(self, identifier: int | str) -> Account:
        """Organization by numeric id or login."""
        key = str(identifier)
        path = f"/organizations/{key}" if _is_numeric(identifier) else f"/orgs/{key}"
        return self._lookup(
            self.cache.accounts,
            key,
            path,
            lambda loader: Account(self, LazyEntity.pending(AccountData, loader), organization=True),
            _account_keys,
        )

    def get_repository(self, identifier: int | str) -> Repository:
        """
        Repository by numeric id or "owner/name".

        Args:
            identifier: Numeric id (int or digit string) or full name

        Returns:
            Repository handle, possibly still loading
        """
        key = str(identifier)
        path = f"/repositories/{key}" if _is_numeric(identifier) else f"/repos/{key}"
        return self._lookup(
            self.cache.repositories,
            key,
            path,
            lambda loader: Repository(self, LazyEntity.pending(RepositoryData, loader)),
            _repository_keys,
        )

    def get_repository_by_name(self, owner: str, name: str | None = None) -> Repository:
        """Repository by owner and name, or by a single "owner/name" string."""
        full_name = f"{owner}/{name}" if name else owner
        return self._lookup(
            self.cache.repositories,
            full_name,
            f"/repos/{full_name}",
            lambda loader: Repository(self, LazyEntity.pending(RepositoryData, loader)),
            _repository_keys,
        )

    def get_gist(self, gist_id: str) -> Gist:
        return self._lookup(
            self.cache.gists,
            str(gist_id),
            f"/gists/{gist_id}",
            lambda loader: Gist(self, LazyEntity.pending(GistData, loader)),
            _gist_keys,
        )

    def get_file(self, url: str | None) -> File:
        """File at a contents URL. Files are not identity cached."""

        async def load() -> Any:
            return await self.requester.fetch(url)

        return File(self, LazyEntity.pending(FileData, load))

    # ============ Creation from known data ============

    def create_user(self, data: Mapping[str, Any]) -> Account:
        user = Account(self, LazyEntity.resolved(AccountData, data))
        self._register(self.cache.accounts, user, _account_keys(data))
        return user

    def create_organization(self, data: Mapping[str, Any]) -> Account:
        organization = Account(self, LazyEntity.resolved(AccountData, data), organization=True)
        self._register(self.cache.accounts, organization, _account_keys(data))
        return organization

    def create_repository(self, data: Mapping[str, Any]) -> Repository:
        repository = Repository(self, LazyEntity.resolved(RepositoryData, data))
        self._register(self.cache.repositories, repository, _repository_keys(data))
        return repository

    def create_gist(self, data: Mapping[str, Any]) -> Gist:
        gist = Gist(self, LazyEntity.resolved(GistData, data))
        self._register(self.cache.gists, gist, _gist_keys(data))
        return gist

    def create_file(self, data: Mapping[str, Any] | list[Mapping[str, Any]]) -> File | list[File]:
        if isinstance(data, list):
            return [self.create_file(item) for item in data]
        return File(self, LazyEntity.resolved(FileData, data))

    def create_event(self, data: Mapping[str, Any] | list[Mapping[str, Any]]) -> Event | list[Event]:
        if isinstance(data, list):
            return [self.create_event(item) for item in data]
        return Event(self, LazyEntity.resolved(EventData, data))

    def create_release(self, data: Mapping[str, Any] | None) -> Release | None:
        if not isinstance(data, Mapping):
            return None
        return Release.model_validate(data)
