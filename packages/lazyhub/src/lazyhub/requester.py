"""Deduplicating GET layer between entities and the transport."""

import asyncio
import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from .cache import Store
from .config import GITHUB_API_URL, HubConfig
from .errors import TransportError
from .transport import Transport

logger = logging.getLogger(__name__)

# Historical marker kept on every GET, the API ignores it.
FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}

RAW_SUFFIX = "#raw"

_TEMPLATE_PATTERN = re.compile(r"\{([/+])(\w+)\}")


def expand_url(template: str | None, **values: str) -> str | None:
    """
    Fill the RFC 6570 style placeholders GitHub embeds in its URLs.

    `{/name}` becomes `/value` (or disappears), `{+name}` becomes the raw value
    (or disappears). Placeholders without a value are removed.

    Args:
        template: URL such as ".../releases{/id}" or None
        values: Placeholder values

    Returns:
        The expanded URL, or None when template is None
    """
    if template is None:
        return None

    def substitute(match: re.Match) -> str:
        operator, name = match.groups()
        value = values.get(name)
        if not value:
            return ""
        if operator == "/":
            return "/" + str(value).lstrip("/")
        return str(value)

    return _TEMPLATE_PATTERN.sub(substitute, template)


class Requester:
    """
    GET with response memoization for parameterless calls.

    Parameterised calls (pagination) are never cached: the key is the path
    alone, so different query strings would collide.
    """

    def __init__(self, config: HubConfig, transport: Transport, store: Store):
        self.config = config
        self.transport = transport
        self.store = store
        self._inflight: dict[str, asyncio.Future] = {}

    def normalize(self, url: str) -> str:
        """Strip the API root so the same resource maps to one key."""
        for root in (self.config.api_url.rstrip("/"), GITHUB_API_URL):
            if url.startswith(root):
                return url[len(root):] or "/"
        return url

    def absolute(self, path: str) -> str:
        if path.startswith("/"):
            return self.config.api_url.rstrip("/") + path
        return path

    async def fetch(
        self,
        url: str | None,
        params: Mapping[str, Any] | None = None,
        *,
        raw: bool = False,
    ) -> Any | None:
        """
        Fetch and decode a resource.

        Args:
            url: Absolute URL or API-root-relative path; None yields None
            params: Query parameters
            raw: Return the body as text instead of decoding JSON

        Returns:
            The decoded payload (or text), or None if the call failed
        """
        if url is None:
            return None

        path = self.normalize(url)
        key = path + RAW_SUFFIX if raw else path
        cacheable = self.config.cache_requests and not params

        if cacheable:
            if self.store.has(key):
                logger.debug("Request cache hit: %s", key)
                return self.store.get(key)
            pending = self._inflight.get(key)
            if pending is not None:
                logger.debug("Joining in-flight request: %s", key)
                return await asyncio.shield(pending)

        if not cacheable:
            return await self._load(path, params, raw)

        future = asyncio.ensure_future(self._load(path, params, raw))
        self._inflight[key] = future
        try:
            data = await asyncio.shield(future)
        finally:
            if self._inflight.get(key) is future:
                del self._inflight[key]
        if data is not None and self.config.cache_requests:
            self.store.put(key, data)
        return data

    async def _load(self, path: str, params: Mapping[str, Any] | None, raw: bool) -> Any | None:
        target = self.absolute(path)
        try:
            text = await self.transport.get(target, params=params, headers=dict(FORM_HEADERS))
        except TransportError as e:
            logger.error("Error fetching %s -> %s", target, e)
            return None
        if raw:
            return text
        try:
            return json.loads(text)
        except ValueError as e:
            logger.error("Could not decode response of %s: %s", target, e)
            return None
