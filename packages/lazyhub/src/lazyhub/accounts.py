"""Users and organizations."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from .events import Event
from .handle import Handle
from .lazy import LazyEntity
from .models import AccountData
from .requester import expand_url

if TYPE_CHECKING:
    from .gists import Gist
    from .hub import Hub
    from .repositories import Repository

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
EVENTS_AFTER_PAGE_SIZE = 30


def _is_after(event: Event, cutoff: datetime) -> bool:
    date = event.get_date()
    return date is not None and date > cutoff


class Account(Handle[AccountData]):
    """
    A GitHub user or organization.

    Organizations are the same kind of handle with `organization=True`: they
    list members and have no organizations of their own.
    """

    def __init__(self, hub: "Hub", lazy: LazyEntity[AccountData], organization: bool = False):
        super().__init__(hub, lazy)
        self._organization = organization

    def is_organization(self) -> bool:
        return self._organization

    @property
    def display_name(self) -> str | None:
        return self.data.name or self.data.login

    async def get_repository(self, name: str) -> "Repository":
        """Repository of this account by name (a pending handle)."""
        await self.await_ready()
        return self._hub.get_repository_by_name(self.data.login, name)

    def get_gist(self, gist_id: str) -> "Gist":
        return self._hub.get_gist(gist_id)

    async def get_repositories(self) -> list["Repository"]:
        """Repositories listed at repos_url."""
        await self.await_ready()

        async def load() -> list["Repository"]:
            items = await self._fetch_list(self.data.repos_url, "repositories")
            return [self._hub.create_repository(item) for item in items]

        return await self._lazy.memoize("repositories", load, list)

    async def get_gists(self) -> list["Gist"]:
        """Public gists of this account."""
        await self.await_ready()

        async def load() -> list["Gist"]:
            items = await self._fetch_list(expand_url(self.data.gists_url), "gists")
            return [self._hub.create_gist(item) for item in items]

        return await self._lazy.memoize("gists", load, list)

    async def get_organizations(self) -> list["Account"]:
        """Organizations this user belongs to, looked up by login."""
        if self._organization:
            return []
        await self.await_ready()

        async def load() -> list["Account"]:
            items = await self._fetch_list(self.data.organizations_url, "organizations")
            keys = [item.get("login") or item.get("id") for item in items]
            return [self._hub.get_organization(key) for key in keys if key]

        return await self._lazy.memoize("organizations", load, list)

    async def get_members(self) -> list["Account"]:
        """Public members of an organization; empty for users."""
        if not self._organization:
            return []
        await self.await_ready()

        async def load() -> list["Account"]:
            items = await self._fetch_list(expand_url(self.data.members_url), "members")
            return [self._hub.create_user(item) for item in items]

        return await self._lazy.memoize("members", load, list)

    async def get_languages(self) -> dict[str, int]:
        """
        Bytes of code per language, summed over all non-fork repositories.

        Each repository's language breakdown is fetched (and cached) by the
        repository itself.
        """
        await self.await_ready()

        async def load() -> dict[str, int]:
            repositories = [repo for repo in await self.get_repositories() if not repo.data.fork]
            totals: dict[str, int] = {}
            breakdowns = await asyncio.gather(*(repo.get_languages() for repo in repositories))
            for languages in breakdowns:
                for language, count in languages.items():
                    totals[language] = totals.get(language, 0) + count
            logger.debug("Languages of %s over %d repositories: %s", self.data.login, len(repositories), totals)
            return totals

        return await self._lazy.memoize("languages", load, dict)

    async def get_events(self, amount: int) -> list[Event]:
        """
        The latest events, newest first.

        Args:
            amount: Number of events wanted; fetched in pages of up to 100

        Returns:
            Up to amount events
        """
        await self.await_ready()
        if amount <= 0:
            return []
        if amount <= MAX_PAGE_SIZE:
            return await self.get_events_by_page(1, amount)

        events: list[Event] = []
        page = 0
        while len(events) < amount:
            page += 1
            batch = await self.get_events_by_page(page, MAX_PAGE_SIZE)
            if not batch:
                break
            events.extend(batch)
        return events[:amount]

    async def get_events_by_page(self, page: int = 1, per_page: int = 20) -> list[Event]:
        await self.await_ready()
        params = {
            "per_page": max(1, min(MAX_PAGE_SIZE, per_page)),
            "page": max(1, page),
        }
        items = await self._hub.requester.fetch(self._events_url(), params)
        if not isinstance(items, list):
            logger.warning("No events page %d for %s", params["page"], self.data.login)
            return []
        return self._hub.create_event(items)

    async def get_events_after(self, cutoff: datetime) -> list[Event]:
        """
        All events strictly newer than cutoff.

        Pages forward until a page contributes nothing new or reaches back
        past the cutoff. Events are expected newest first. A naive cutoff is
        taken as UTC.

        Args:
            cutoff: Oldest moment of interest (exclusive)

        Returns:
            Events newer than cutoff, newest first
        """
        if cutoff.tzinfo is None:
            cutoff = cutoff.replace(tzinfo=timezone.utc)

        events: list[Event] = []
        page = 0
        while True:
            page += 1
            batch = await self.get_events_by_page(page, EVENTS_AFTER_PAGE_SIZE)
            fresh = [event for event in batch if _is_after(event, cutoff)]
            events.extend(fresh)
            if not fresh:
                break
            oldest = batch[-1].get_date()
            if oldest is None or oldest <= cutoff:
                break
        logger.debug("%d events of %s after %s over %d pages", len(events), self.data.login, cutoff, page)
        return events

    def _events_url(self) -> str | None:
        if self.data.url is None:
            return None
        return self.data.url + "/events"

    def _label(self) -> str:
        return str(self.data.login or self.data.id)
