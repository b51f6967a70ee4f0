"""Tests for Repository accessors."""

import base64

import pytest

from lazyhub import Account, File, Hub


@pytest.fixture
def hello(github, octocat):
    return github.add_repo(octocat, "hello-world", 1296269)


class TestOwner:
    """Owner resolution and ownership checks."""

    @pytest.mark.asyncio
    async def test_owner_is_canonical_account(self, hub: Hub, github, hello) -> None:
        repo = hub.get_repository("octocat/hello-world")

        owner = await repo.get_owner()

        assert isinstance(owner, Account)
        assert owner.is_ready()
        assert owner is hub.get_user_by_name("octocat")
        assert owner.name == "The Octocat"

    @pytest.mark.asyncio
    async def test_organization_owner(self, hub: Hub, github) -> None:
        org = github.add_org("github", 9919)
        github.add_repo(org, "docs", 5)

        owner = await hub.get_repository("github/docs").get_owner()

        assert owner.is_organization()
        assert github.count("/orgs/github") == 1

    @pytest.mark.asyncio
    async def test_missing_owner_is_none(self, hub: Hub) -> None:
        repo = hub.create_repository({"id": 7, "full_name": "nobody/orphan"})

        assert await repo.get_owner() is None
        assert await repo.is_owner(1) is False

    @pytest.mark.asyncio
    async def test_is_owner_accepts_any_identifier_form(self, hub: Hub, github, hello) -> None:
        repo = hub.get_repository("octocat/hello-world")
        owner = hub.get_user_by_name("octocat")

        assert await repo.is_owner(owner)
        assert await repo.is_owner(583231)
        assert await repo.is_owner("583231")
        assert await repo.is_owner({"id": "583231"})
        assert not await repo.is_owner(1)

    @pytest.mark.asyncio
    async def test_is_contributor(self, hub: Hub, github, hello) -> None:
        github.add(hello["contributors_url"], [
            {"login": "octocat", "id": 583231, "contributions": 32},
            {"login": "hubot", "id": 2, "contributions": 1},
        ])
        repo = hub.get_repository("octocat/hello-world")

        assert await repo.is_contributor(2)
        assert await repo.is_contributor({"id": 583231})
        assert not await repo.is_contributor("3")
        assert github.count(hello["contributors_url"]) == 1

    @pytest.mark.asyncio
    async def test_contributors_degrade_to_empty(self, hub: Hub, github, hello) -> None:
        repo = hub.get_repository("octocat/hello-world")

        assert await repo.get_contributors() == []
        assert not await repo.is_contributor(583231)


class TestLanguages:
    """Per-repository language breakdown."""

    @pytest.mark.asyncio
    async def test_cached_after_first_call(self, hub: Hub, github, hello) -> None:
        github.add(hello["languages_url"], {"Go": 120, "Rust": 80})
        repo = hub.get_repository("octocat/hello-world")

        assert await repo.get_languages() == {"Go": 120, "Rust": 80}
        assert await repo.get_languages() == {"Go": 120, "Rust": 80}
        assert github.count(hello["languages_url"]) == 1

    @pytest.mark.asyncio
    async def test_failure_is_empty_and_retried(self, hub: Hub, github, hello) -> None:
        repo = hub.get_repository("octocat/hello-world")

        assert await repo.get_languages() == {}
        github.add(hello["languages_url"], {"Go": 1})
        assert await repo.get_languages() == {"Go": 1}


class TestReleases:
    """Releases and version."""

    @pytest.mark.asyncio
    async def test_latest_release_uses_latest_endpoint(self, hub: Hub, github, hello) -> None:
        github.add("/repos/octocat/hello-world/releases/latest", {"tag_name": "v1.0.0"})
        repo = hub.get_repository("octocat/hello-world")

        release = await repo.get_latest_release()

        assert release.tag_name == "v1.0.0"

    @pytest.mark.asyncio
    async def test_draft_ok_takes_first_listed_release(self, hub: Hub, github, hello) -> None:
        github.add("/repos/octocat/hello-world/releases", [
            {"tag_name": "v2.0.0-rc1", "prerelease": True},
            {"tag_name": "v1.0.0"},
        ])
        repo = hub.get_repository("octocat/hello-world")

        release = await repo.get_latest_release(draft_ok=True)

        assert release.tag_name == "v2.0.0-rc1"
        assert release.prerelease

    @pytest.mark.asyncio
    async def test_no_latest_release(self, hub: Hub, github, hello) -> None:
        repo = hub.get_repository("octocat/hello-world")

        assert await repo.get_latest_release() is None

    @pytest.mark.asyncio
    async def test_version_is_cached(self, hub: Hub, github, hello) -> None:
        github.add("/repos/octocat/hello-world/releases", [{"tag_name": "v2.0.0"}])
        repo = hub.get_repository("octocat/hello-world")

        assert await repo.get_version() == "v2.0.0"
        assert await repo.get_version() == "v2.0.0"
        assert github.count("/repos/octocat/hello-world/releases") == 1

    @pytest.mark.asyncio
    async def test_version_without_releases(self, hub: Hub, github, hello) -> None:
        github.add("/repos/octocat/hello-world/releases", [])
        repo = hub.get_repository("octocat/hello-world")

        assert await repo.get_version() == ""


class TestContents:
    """Files of a repository."""

    @pytest.mark.asyncio
    async def test_get_file_by_path(self, hub: Hub, github, hello) -> None:
        github.add("/repos/octocat/hello-world/contents/docs/README.md", {
            "name": "README.md",
            "path": "docs/README.md",
            "type": "file",
            "content": base64.b64encode(b"# Hello\n").decode(),
            "encoding": "base64",
        })
        repo = hub.get_repository("octocat/hello-world")

        file = await repo.get_file("docs/README.md")

        assert isinstance(file, File)
        assert file.is_ready()
        assert file.is_from_repository()
        assert await repo.get_file_content("docs/README.md") == "# Hello\n"

    @pytest.mark.asyncio
    async def test_contents_listing(self, hub: Hub, github, hello) -> None:
        github.add("/repos/octocat/hello-world/contents", [
            {"name": "README", "path": "README", "type": "file"},
            {"name": "src", "path": "src", "type": "dir"},
        ])
        repo = hub.get_repository("octocat/hello-world")

        contents = await repo.get_contents()

        assert [await item.get_name() for item in contents] == ["README", "src"]
        assert await repo.get_contents() is contents
