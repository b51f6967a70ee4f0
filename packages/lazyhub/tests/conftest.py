"""
Pytest configuration and shared fixtures for lazyhub tests.

FakeGitHub serves canned JSON for exact URL + query combinations and records
every call, so tests can count network round-trips.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any

import pytest

from lazyhub import Hub, HubCache, HubConfig
from lazyhub.errors import TransportError

API = "https://api.github.com"


@dataclass
class Call:
    url: str
    params: dict[str, Any] | None
    headers: dict[str, str] = field(default_factory=dict)


class FakeGitHub:
    """Transport double with helpers building GitHub-shaped payloads."""

    def __init__(self) -> None:
        self.routes: dict[tuple, Any] = {}
        self.calls: list[Call] = []

    @staticmethod
    def _key(url: str, params: dict[str, Any] | None) -> tuple:
        return url, tuple(sorted((params or {}).items()))

    def add(self, url: str, body: Any, params: dict[str, Any] | None = None) -> Any:
        if url.startswith("/"):
            url = API + url
        self.routes[self._key(url, params)] = body
        return body

    def count(self, url: str) -> int:
        if url.startswith("/"):
            url = API + url
        return sum(1 for call in self.calls if call.url == url)

    async def get(self, url, params=None, headers=None) -> str:
        self.calls.append(Call(url, dict(params) if params else None, dict(headers or {})))
        # Yield like a real round-trip so concurrent callers interleave.
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        key = self._key(url, dict(params) if params else None)
        if key not in self.routes:
            raise TransportError(f"GET {url} failed with status 404", url=url, status_code=404)
        body = self.routes[key]
        if isinstance(body, Exception):
            raise body
        return body if isinstance(body, str) else json.dumps(body)

    # ============ Payload helpers ============

    def add_user(self, login: str, user_id: int, **extra: Any) -> dict[str, Any]:
        url = f"{API}/users/{login}"
        payload = {
            "login": login,
            "id": user_id,
            "type": "User",
            "name": extra.pop("name", None),
            "url": url,
            "repos_url": f"{url}/repos",
            "gists_url": f"{url}/gists{{/gist_id}}",
            "organizations_url": f"{url}/orgs",
            "events_url": f"{url}/events{{/privacy}}",
            "public_repos": 2,
            **extra,
        }
        self.add(url, payload)
        return payload

    def add_org(self, login: str, org_id: int, **extra: Any) -> dict[str, Any]:
        url = f"{API}/orgs/{login}"
        payload = {
            "login": login,
            "id": org_id,
            "type": "Organization",
            "url": url,
            "repos_url": f"{url}/repos",
            "members_url": f"{url}/members{{/member}}",
            **extra,
        }
        self.add(url, payload)
        return payload

    def repo_payload(self, owner: dict[str, Any], name: str, repo_id: int, **extra: Any) -> dict[str, Any]:
        full_name = f"{owner['login']}/{name}"
        url = f"{API}/repos/{full_name}"
        return {
            "id": repo_id,
            "name": name,
            "full_name": full_name,
            "owner": {"login": owner["login"], "id": owner["id"], "type": owner.get("type", "User")},
            "fork": False,
            "url": url,
            "languages_url": f"{url}/languages",
            "contributors_url": f"{url}/contributors",
            "contents_url": f"{url}/contents/{{+path}}",
            "releases_url": f"{url}/releases{{/id}}",
            **extra,
        }

    def add_repo(self, owner: dict[str, Any], name: str, repo_id: int, **extra: Any) -> dict[str, Any]:
        payload = self.repo_payload(owner, name, repo_id, **extra)
        self.add(payload["url"], payload)
        return payload

    def event_payload(self, event_id: int, created_at: str, login: str = "octocat") -> dict[str, Any]:
        return {
            "id": str(event_id),
            "type": "PushEvent",
            "actor": {"login": login, "id": 1},
            "repo": {"id": 10, "name": f"{login}/hello"},
            "payload": {},
            "created_at": created_at,
        }


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def config() -> HubConfig:
    return HubConfig(api_url=API, cache_objects=True, cache_requests=False)


@pytest.fixture
def cache() -> HubCache:
    return HubCache()


@pytest.fixture
def hub(config: HubConfig, cache: HubCache, github: FakeGitHub) -> Hub:
    return Hub(config=config, cache=cache, transport=github)


@pytest.fixture
def octocat(github: FakeGitHub) -> dict[str, Any]:
    return github.add_user("octocat", 583231, name="The Octocat")
