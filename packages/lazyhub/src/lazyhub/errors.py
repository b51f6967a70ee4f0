"""Error types raised inside lazyhub.

These never reach callers of the entity accessors: the requester and the
accessor layer log them and degrade to an absent value or an empty result.
"""


class HubError(Exception):
    """Base error for lazyhub."""


class TransportError(HubError):
    """Raised when a GET could not be completed."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MissingDataError(HubError):
    """Raised when a request yielded no usable payload or a relationship is absent."""
