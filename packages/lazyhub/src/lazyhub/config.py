"""Process configuration and token resolution."""

import logging
import os
import shutil
import subprocess

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3

_TRUE_VALUES = {"1", "true", "yes", "on"}


# Checked in order; GH_TOKEN is what the gh cli itself honours first.
TOKEN_ENV_VARS = ("GH_TOKEN", "GITHUB_TOKEN")
GH_CLI_TIMEOUT = 5


def read_gh_cli_token(timeout: float = GH_CLI_TIMEOUT) -> str | None:
    """
    Ask an installed and logged-in gh cli for its token.

    Args:
        timeout: Seconds to wait for `gh auth token`

    Returns:
        The token, or None when gh is missing, not logged in or too slow
    """
    executable = shutil.which("gh")
    if executable is None:
        logger.debug("gh cli not on PATH")
        return None
    try:
        completed = subprocess.run(
            [executable, "auth", "token"],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.debug("gh cli did not answer: %s", e)
        return None
    token = completed.stdout.strip()
    if completed.returncode != 0 or not token:
        logger.debug("gh cli has no token (exit %d): %s", completed.returncode, completed.stderr.strip())
        return None
    logger.info("Token taken from gh cli")
    return token


def get_token(token: str | None = None, use_gh_cli: bool = False) -> str | None:
    """
    Resolve the token sent as Authorization.

    An explicit token wins, then the first of TOKEN_ENV_VARS that is set.
    The gh cli is only consulted when use_gh_cli is given.

    Args:
        token: Token passed by the caller
        use_gh_cli: Allow falling back to `gh auth token`

    Returns:
        Token or None for anonymous access
    """
    if token:
        return token
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name)
        if value:
            logger.debug("Token taken from %s", name)
            return value
    if use_gh_cli:
        return read_gh_cli_token()
    logger.debug("No token, requests are anonymous")
    return None


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


class HubConfig(BaseModel):
    """
    Settings shared by a Hub and everything it creates.

    The instance is mutable; every operation reads it when it runs, so a
    change only affects subsequent operations.
    """

    model_config = ConfigDict(validate_assignment=True)

    # May point at a proxy in front of the API (server-side secret, shared cache).
    api_url: str = GITHUB_API_URL
    # One handle per entity requested by id or name.
    cache_objects: bool = True
    # Reuse decoded responses of parameterless GETs.
    cache_requests: bool = False
    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES

    @classmethod
    def from_env(cls, token: str | None = None, use_gh_cli: bool = False) -> "HubConfig":
        """
        Build configuration from LAZYHUB_* environment variables.

        Args:
            token: Explicit token, takes precedence over the environment
            use_gh_cli: Fall back to `gh auth token` when no token is found

        Returns:
            HubConfig instance
        """
        config = cls(
            api_url=os.environ.get("LAZYHUB_API_URL", GITHUB_API_URL).rstrip("/"),
            cache_objects=_env_flag("LAZYHUB_CACHE_OBJECTS", True),
            cache_requests=_env_flag("LAZYHUB_CACHE_REQUESTS", False),
            token=get_token(token, use_gh_cli=use_gh_cli),
            timeout=float(os.environ.get("LAZYHUB_TIMEOUT", DEFAULT_TIMEOUT)),
            max_retries=int(os.environ.get("LAZYHUB_MAX_RETRIES", DEFAULT_MAX_RETRIES)),
        )
        logger.debug(
            "Config loaded: api_url=%s cache_objects=%s cache_requests=%s",
            config.api_url,
            config.cache_objects,
            config.cache_requests,
        )
        return config
