"""HTTP transport for the GitHub REST API."""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from .config import HubConfig
from .errors import TransportError

logger = logging.getLogger(__name__)

# Retry configuration
DEFAULT_MIN_WAIT = 1  # seconds
DEFAULT_MAX_WAIT = 10  # seconds

# Retryable exceptions
RETRYABLE_EXCEPTIONS = (
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.ReadTimeout,
    httpx.WriteTimeout,
    httpx.PoolTimeout,
    httpx.NetworkError,
)


class Transport(Protocol):
    """Anything able to perform a GET and return the response body as text."""

    async def get(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str: ...


def is_retryable(error: BaseException) -> bool:
    """Network errors, timeouts and 5xx responses are worth another attempt."""
    if isinstance(error, RETRYABLE_EXCEPTIONS):
        return True
    return isinstance(error, httpx.HTTPStatusError) and error.response.status_code >= 500


def create_retry_decorator(max_retries: int, wait: wait_base | None = None):
    """Create a retry decorator with specified max retries."""
    return retry(
        retry=retry_if_exception(is_retryable),
        stop=stop_after_attempt(max(1, max_retries)),
        wait=wait or wait_exponential(multiplier=1, min=DEFAULT_MIN_WAIT, max=DEFAULT_MAX_WAIT),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


class HttpxTransport:
    """GitHub REST transport on httpx with retry support."""

    USER_AGENT = "lazyhub-github-client"

    def __init__(
        self,
        config: HubConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        wait: wait_base | None = None,
    ):
        """
        Initialize transport.

        Args:
            config: Shared configuration; timeout, token and retries are read per call
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
            wait: Optional tenacity wait strategy between retries
        """
        self.config = config
        self._transport = transport
        self._wait = wait
        if config.token:
            logger.debug("GitHub transport initialized with token")
        else:
            logger.warning("GitHub transport initialized without token (rate limited)")

    def _headers(self, extra: Mapping[str, str] | None) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": self.USER_AGENT,
        }
        if self.config.token:
            headers["Authorization"] = f"token {self.config.token}"
        if extra:
            headers.update(extra)
        return headers

    async def get(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        """
        GET a URL with retry.

        Args:
            url: Absolute URL
            params: Query parameters, URL-encoded by httpx
            headers: Extra request headers

        Returns:
            Response body as text

        Raises:
            TransportError: On network failure or a non-2xx response
        """
        request_headers = self._headers(headers)

        @create_retry_decorator(self.config.max_retries, self._wait)
        async def do_request() -> str:
            logger.debug("Request: GET %s params=%s", url, params)
            async with httpx.AsyncClient(
                timeout=self.config.timeout,
                headers=request_headers,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=dict(params) if params else None)
                logger.debug("Response: GET %s (status=%d)", url, response.status_code)
                if response.status_code >= 500:
                    logger.warning("Server error %d, will retry", response.status_code)
                response.raise_for_status()
                return response.text

        try:
            return await do_request()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"GET {url} failed with status {e.response.status_code}",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"GET {url} failed: {e}", url=url) from e
