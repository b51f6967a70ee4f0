"""Lazy, identity-cached object model over the GitHub REST API."""

from .accounts import Account
from .cache import HubCache, Store, StoreStats
from .config import HubConfig, get_token
from .errors import HubError, MissingDataError, TransportError
from .events import Event
from .files import File
from .gists import Gist
from .hub import Hub
from .lazy import LazyEntity, Slot, SlotState
from .models import AccountData, EventData, FileData, GistData, Release, RepositoryData
from .repositories import Repository
from .requester import Requester, expand_url
from .transport import HttpxTransport, Transport

__all__ = [
    "Hub",
    "HubConfig",
    "HubCache",
    "Store",
    "StoreStats",
    "LazyEntity",
    "Slot",
    "SlotState",
    "Account",
    "Repository",
    "Gist",
    "File",
    "Event",
    "Release",
    "AccountData",
    "RepositoryData",
    "GistData",
    "FileData",
    "EventData",
    "Requester",
    "Transport",
    "HttpxTransport",
    "HubError",
    "TransportError",
    "MissingDataError",
    "expand_url",
    "get_token",
]
