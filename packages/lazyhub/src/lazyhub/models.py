"""GitHub API data models.

Every field is optional: a handle's structure starts empty and is filled by
population, and embedded payloads (an owner inside a repository, a member
list) carry only a subset of the fields. Unknown remote fields are kept.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    """Base for remote payload structures."""

    model_config = ConfigDict(extra="allow")


class AccountRef(ApiModel):
    """Account summary embedded in other payloads (owner, actor)."""

    login: str | None = None
    id: int | None = None
    type: str | None = None
    url: str | None = None
    avatar_url: str | None = None
    html_url: str | None = None


class RepositoryRef(ApiModel):
    """Repository summary embedded in events."""

    id: int | None = None
    name: str | None = None
    url: str | None = None


class License(ApiModel):
    key: str | None = None
    name: str | None = None
    spdx_id: str | None = None
    url: str | None = None


class AccountData(ApiModel):
    """User or organization fields."""

    login: str | None = None
    id: int | None = None
    node_id: str | None = None
    type: str | None = None
    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    bio: str | None = None
    description: str | None = None
    twitter_username: str | None = None
    hireable: bool | None = None
    site_admin: bool | None = None
    is_verified: bool | None = None
    avatar_url: str | None = None
    gravatar_id: str | None = None
    url: str | None = None
    html_url: str | None = None
    followers_url: str | None = None
    following_url: str | None = None
    gists_url: str | None = None
    starred_url: str | None = None
    subscriptions_url: str | None = None
    organizations_url: str | None = None
    repos_url: str | None = None
    events_url: str | None = None
    received_events_url: str | None = None
    hooks_url: str | None = None
    issues_url: str | None = None
    members_url: str | None = None
    public_members_url: str | None = None
    public_repos: int | None = None
    public_gists: int | None = None
    followers: int | None = None
    following: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RepositoryData(ApiModel):
    """Repository fields."""

    id: int | None = None
    node_id: str | None = None
    name: str | None = None
    full_name: str | None = None
    private: bool | None = None
    owner: AccountRef | None = None
    html_url: str | None = None
    description: str | None = None
    fork: bool | None = None
    url: str | None = None
    homepage: str | None = None
    language: str | None = None
    default_branch: str | None = None
    visibility: str | None = None
    archived: bool | None = None
    disabled: bool | None = None
    is_template: bool | None = None
    license: License | None = None
    topics: list[str] = Field(default_factory=list)
    size: int | None = None
    stargazers_count: int | None = None
    watchers_count: int | None = None
    forks_count: int | None = None
    open_issues_count: int | None = None
    subscribers_count: int | None = None
    network_count: int | None = None
    languages_url: str | None = None
    contributors_url: str | None = None
    contents_url: str | None = None
    releases_url: str | None = None
    events_url: str | None = None
    tags_url: str | None = None
    branches_url: str | None = None
    commits_url: str | None = None
    issues_url: str | None = None
    pulls_url: str | None = None
    git_url: str | None = None
    ssh_url: str | None = None
    clone_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pushed_at: datetime | None = None


class GistData(ApiModel):
    """Gist fields. files maps file name to the embedded file payload."""

    id: str | None = None
    node_id: str | None = None
    url: str | None = None
    html_url: str | None = None
    forks_url: str | None = None
    commits_url: str | None = None
    comments_url: str | None = None
    git_pull_url: str | None = None
    git_push_url: str | None = None
    public: bool | None = None
    description: str | None = None
    comments: int | None = None
    owner: AccountRef | None = None
    files: dict[str, dict[str, Any]] = Field(default_factory=dict)
    truncated: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FileData(ApiModel):
    """File fields, from a gist (filename, raw_url) or a repository (name, download_url)."""

    # gist
    filename: str | None = None
    language: str | None = None
    raw_url: str | None = None
    # repository
    name: str | None = None
    path: str | None = None
    sha: str | None = None
    url: str | None = None
    html_url: str | None = None
    git_url: str | None = None
    download_url: str | None = None
    # both
    type: str | None = None
    size: int | None = None
    content: str | None = None
    encoding: str | None = None  # "base64" for repository files
    truncated: bool | None = None


class EventData(ApiModel):
    """Activity event fields."""

    id: str | None = None
    type: str | None = None
    actor: AccountRef | None = None
    repo: RepositoryRef | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    public: bool | None = None
    created_at: datetime | None = None


class Release(ApiModel):
    """Repository release. Plain data, never loaded lazily."""

    id: int | None = None
    tag_name: str | None = None
    name: str | None = None
    body: str | None = None
    draft: bool = False
    prerelease: bool = False
    html_url: str | None = None
    tarball_url: str | None = None
    zipball_url: str | None = None
    author: AccountRef | None = None
    created_at: datetime | None = None
    published_at: datetime | None = None
