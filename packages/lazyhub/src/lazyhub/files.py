"""Files of repositories and gists."""

import base64
import binascii
import logging

from .errors import MissingDataError
from .handle import Handle
from .models import FileData

logger = logging.getLogger(__name__)


class File(Handle[FileData]):
    """
    A file from a repository or a gist.

    Gist files carry `filename` and `raw_url`; repository files carry `name`,
    `path` and `download_url`. The methods answer the same questions for both.
    """

    async def get_name(self) -> str | None:
        await self.await_ready()
        return self.data.filename or self.data.name

    async def get_raw_url(self) -> str | None:
        await self.await_ready()
        return self.data.raw_url or self.data.download_url

    async def get_content(self) -> str:
        """
        Text content of the file.

        Embedded content is used when complete: base64 content is decoded,
        unencoded content is returned as is. Otherwise the raw URL is fetched
        once and the text is kept on the file.

        Returns:
            File text, or "" if it could not be retrieved
        """
        await self.await_ready()
        data = self.data
        if data.content is not None and not data.truncated:
            if data.encoding == "base64":
                try:
                    return base64.b64decode(data.content).decode("utf-8")
                except (binascii.Error, UnicodeDecodeError) as e:
                    logger.warning("Could not decode %s: %s", data.path or data.filename, e)
            elif not data.encoding:
                return data.content

        async def download() -> str:
            raw_url = await self.get_raw_url()
            logger.debug("Downloading file content: %s", raw_url)
            text = await self._hub.requester.fetch(raw_url, raw=True)
            if text is None:
                raise MissingDataError(f"no content at {raw_url}")
            self._lazy.data = self.data.model_copy(update={"content": text, "encoding": None, "truncated": False})
            return text

        return await self._lazy.memoize("content", download, str)

    def is_from_gist(self) -> bool:
        return bool(self.data.filename)

    def is_from_repository(self) -> bool:
        return bool(self.data.name)

    def _label(self) -> str:
        return str(self.data.path or self.data.filename)
