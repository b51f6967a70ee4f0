"""Repositories and their releases, contributors and contents."""

import logging
from typing import TYPE_CHECKING, Any

from .errors import MissingDataError
from .handle import Handle, identify
from .models import Release, RepositoryData
from .requester import expand_url

if TYPE_CHECKING:
    from .accounts import Account
    from .files import File

logger = logging.getLogger(__name__)


class Repository(Handle[RepositoryData]):
    """A GitHub repository."""

    async def get_owner(self) -> "Account | None":
        """The owning account, populated. None when the payload names no owner."""
        await self.await_ready()
        owner = self.data.owner
        if owner is None or not owner.login:
            logger.warning("Repository %s has no owner", self.data.full_name)
            return None
        if owner.type == "Organization":
            account = self._hub.get_organization(owner.login)
        else:
            account = self._hub.get_user_by_name(owner.login)
        return await account.await_ready()

    async def get_languages(self) -> dict[str, int]:
        """Bytes of code per language."""
        await self.await_ready()

        async def load() -> dict[str, int]:
            languages = await self._hub.requester.fetch(self.data.languages_url)
            if not isinstance(languages, dict):
                raise MissingDataError(f"no languages for {self.data.full_name}")
            return languages

        return await self._lazy.memoize("languages", load, dict)

    async def get_contributors(self) -> list["Account"]:
        await self.await_ready()

        async def load() -> list["Account"]:
            items = await self._fetch_list(self.data.contributors_url, "contributors")
            return [self._hub.create_user(item) for item in items]

        return await self._lazy.memoize("contributors", load, list)

    async def get_contents(self) -> list["File"]:
        """Entries of the repository root directory."""
        await self.await_ready()

        async def load() -> list["File"]:
            url = self.data.url + "/contents" if self.data.url else None
            items = await self._fetch_list(url, "contents")
            return self._hub.create_file(items)

        return await self._lazy.memoize("contents", load, list)

    async def get_releases(self) -> list[Release]:
        """Releases, newest first, drafts and prereleases included."""
        await self.await_ready()

        async def load() -> list[Release]:
            items = await self._fetch_list(expand_url(self.data.releases_url), "releases")
            return [Release.model_validate(item) for item in items]

        return await self._lazy.memoize("releases", load, list)

    async def get_latest_release(self, draft_ok: bool = False) -> Release | None:
        """
        Newest release.

        Args:
            draft_ok: Take the first entry of the release list, which may be a
                draft or prerelease, instead of the strict "latest" endpoint

        Returns:
            Release or None
        """
        await self.await_ready()
        if draft_ok:
            releases = await self.get_releases()
            return releases[0] if releases else None
        data = await self._hub.requester.fetch(expand_url(self.data.releases_url, id="latest"))
        return self._hub.create_release(data)

    async def get_version(self) -> str:
        """Tag name of the newest release, "" if there is none."""
        await self.await_ready()

        async def load() -> str:
            release = await self.get_latest_release(True)
            if release is None:
                return ""
            return release.tag_name or ""

        return await self._lazy.memoize("version", load, str)

    async def get_file(self, path: str) -> "File":
        """A file of the default branch, populated."""
        await self.await_ready()
        return await self._hub.get_file(expand_url(self.data.contents_url, path=path)).await_ready()

    async def get_file_content(self, path: str) -> str:
        file = await self.get_file(path)
        return await file.get_content()

    async def is_contributor(self, user: Any) -> bool:
        user_id = await identify(user)
        if user_id is None:
            return False
        return any(str(member.data.id) == user_id for member in await self.get_contributors())

    async def is_owner(self, user: Any) -> bool:
        await self.await_ready()
        owner_id = self.data.owner.id if self.data.owner else None
        if owner_id is None:
            owner = await self.get_owner()
            owner_id = owner.data.id if owner else None
        if owner_id is None:
            return False
        return str(owner_id) == await identify(user)

    def _label(self) -> str:
        return str(self.data.full_name or self.data.id)
