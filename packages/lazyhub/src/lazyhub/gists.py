"""Gists."""

import logging
from typing import TYPE_CHECKING, Any

from .handle import Handle, identify
from .models import GistData

if TYPE_CHECKING:
    from .accounts import Account
    from .files import File

logger = logging.getLogger(__name__)


class Gist(Handle[GistData]):
    """A gist. Its files are embedded in the gist payload."""

    async def get_owner(self) -> "Account | None":
        """The owning account, populated. None for anonymous gists."""
        await self.await_ready()
        owner = self.data.owner
        if owner is None or not owner.login:
            logger.warning("Gist %s has no owner", self.data.id)
            return None
        return await self._hub.get_user_by_name(owner.login).await_ready()

    async def get_files(self) -> list["File"]:
        await self.await_ready()

        async def load() -> list["File"]:
            return [self._hub.create_file(item) for item in self.data.files.values()]

        return await self._lazy.memoize("files", load, list)

    async def get_file(self, name: str) -> "File | None":
        """
        File of this gist by name.

        Args:
            name: File name as listed in the gist

        Returns:
            File handle or None if the gist has no such file
        """
        for file in await self.get_files():
            if file.data.filename == name:
                return file
        return None

    async def get_file_names(self) -> list[str]:
        await self.await_ready()
        return list(self.data.files)

    async def is_owner(self, user: Any) -> bool:
        await self.await_ready()
        owner = self.data.owner
        if owner is None or owner.id is None:
            return False
        return str(owner.id) == await identify(user)
