"""Immutable snapshots of GitHub resources and their navigation methods.

Entities never hold the client. Every navigation method takes it as the
first argument and delegates to the matching client operation, so each call
issues a fresh request and nothing is cached on the entity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ghgraph.errors import GitHubInputError
from ghgraph.paths import GITHUB_WEB_BASE_URL, ResourcePath, join_segments
from ghgraph.result import Result
from ghgraph.snapshot import (
    optional_int,
    optional_str,
    require_bool,
    require_int,
    require_object,
    require_str,
)

if TYPE_CHECKING:
    from ghgraph.client import GitHubGraphClient

CONTENT_TYPE_FILE = "file"
CONTENT_TYPE_DIR = "dir"


@dataclass(frozen=True, slots=True)
class User:
    """GitHub user profile snapshot."""

    login: str
    id: int
    display_name: str | None
    location: str | None
    avatar_url: str | None
    bio: str | None
    repos_size: int | None
    gists_size: int | None

    @classmethod
    def from_snapshot(cls, payload: dict[str, Any], *, endpoint: str) -> User:
        """Decode a user object; embedded owner objects omit the profile counters."""
        return cls(
            login=require_str(payload, key="login", endpoint=endpoint),
            id=require_int(payload, key="id", endpoint=endpoint),
            display_name=optional_str(payload, key="name", endpoint=endpoint),
            location=optional_str(payload, key="location", endpoint=endpoint),
            avatar_url=optional_str(payload, key="avatar_url", endpoint=endpoint),
            bio=optional_str(payload, key="bio", endpoint=endpoint),
            repos_size=optional_int(payload, key="public_repos", endpoint=endpoint),
            gists_size=optional_int(payload, key="public_gists", endpoint=endpoint),
        )

    @property
    def web_url(self) -> str:
        return ResourcePath.of(GITHUB_WEB_BASE_URL).derive(self.login).url

    def repository(self, client: GitHubGraphClient, name: str) -> Result[Repository]:
        """Look up one of this user's repositories by name."""
        return client.repository(self.login, name)

    def repositories(self, client: GitHubGraphClient) -> Result[tuple[Repository, ...]]:
        """List this user's public repositories (first page only)."""
        return client.repositories_of(self.login)


@dataclass(frozen=True, slots=True)
class Repository:
    """GitHub repository snapshot with its owner decoded as a ``User``."""

    owner_login: str
    name: str
    id: int
    full_name: str
    description: str | None
    homepage: str | None
    default_branch: str
    archived: bool
    owner: User

    @classmethod
    def from_snapshot(cls, payload: dict[str, Any], *, endpoint: str) -> Repository:
        owner = User.from_snapshot(
            require_object(payload, key="owner", endpoint=endpoint),
            endpoint=endpoint,
        )
        return cls(
            owner_login=owner.login,
            name=require_str(payload, key="name", endpoint=endpoint),
            id=require_int(payload, key="id", endpoint=endpoint),
            full_name=require_str(payload, key="full_name", endpoint=endpoint),
            description=optional_str(payload, key="description", endpoint=endpoint),
            homepage=optional_str(payload, key="homepage", endpoint=endpoint),
            default_branch=require_str(payload, key="default_branch", endpoint=endpoint),
            archived=require_bool(payload, key="archived", endpoint=endpoint),
            owner=owner,
        )

    @property
    def web_url(self) -> str:
        return ResourcePath.of(GITHUB_WEB_BASE_URL).derive(self.owner_login).derive(self.name).url

    def user(self, client: GitHubGraphClient) -> Result[User]:
        """Fetch the owner's full profile; ``owner`` only carries identity fields."""
        return client.user(self.owner_login)

    def branch(self, client: GitHubGraphClient, name: str) -> Result[Branch]:
        return client.branch(self.owner_login, self.name, name)

    def branches(self, client: GitHubGraphClient) -> Result[tuple[Branch, ...]]:
        return client.branches_of(self.owner_login, self.name)

    def default(self, client: GitHubGraphClient) -> Result[Branch]:
        """Look up the repository's default branch."""
        return client.branch(self.owner_login, self.name, self.default_branch)

    def file(
        self,
        client: GitHubGraphClient,
        path: str | None = None,
        branch: str | None = None,
    ) -> Result[File]:
        """Look up a file; without ``branch`` the remote default branch is used."""
        return client.file(self.owner_login, self.name, branch, path)

    def files(
        self,
        client: GitHubGraphClient,
        dir_path: str | None = None,
        branch: str | None = None,
    ) -> Result[tuple[File, ...]]:
        return client.files_of(self.owner_login, self.name, branch, dir_path)


@dataclass(frozen=True, slots=True)
class Branch:
    """A branch of a repository; only the name is read from the snapshot."""

    owner_login: str
    repository_name: str
    name: str

    @classmethod
    def from_snapshot(
        cls,
        payload: dict[str, Any],
        *,
        owner_login: str,
        repository_name: str,
        endpoint: str,
    ) -> Branch:
        return cls(
            owner_login=owner_login,
            repository_name=repository_name,
            name=require_str(payload, key="name", endpoint=endpoint),
        )

    def repository(self, client: GitHubGraphClient) -> Result[Repository]:
        return client.repository(self.owner_login, self.repository_name)

    def file(self, client: GitHubGraphClient, path: str | None) -> Result[File]:
        """Look up a file or directory entry on this branch."""
        return client.file(self.owner_login, self.repository_name, self.name, path)

    def files(
        self, client: GitHubGraphClient, dir_path: str | None = None
    ) -> Result[tuple[File, ...]]:
        """List a directory on this branch; the root when ``dir_path`` is omitted."""
        return client.files_of(self.owner_login, self.repository_name, self.name, dir_path)

    def raw_file(self, client: GitHubGraphClient, path: str) -> RawFile:
        """Address raw content on this branch without issuing a request."""
        return client.raw_file(self.owner_login, self.repository_name, self.name, path)


@dataclass(frozen=True, slots=True)
class File:
    """An entry of the contents endpoint: a file, a directory, or another kind.

    ``branch`` is the ref the entry was looked up with, or ``None`` when the
    remote default branch was used.
    """

    owner_login: str
    repository_name: str
    branch: str | None
    name: str
    path: str
    type: str
    download_url: str | None
    sha: str
    size: int

    @classmethod
    def from_snapshot(
        cls,
        payload: dict[str, Any],
        *,
        owner_login: str,
        repository_name: str,
        branch: str | None,
        endpoint: str,
    ) -> File:
        return cls(
            owner_login=owner_login,
            repository_name=repository_name,
            branch=branch,
            name=require_str(payload, key="name", endpoint=endpoint),
            path=require_str(payload, key="path", endpoint=endpoint),
            type=require_str(payload, key="type", endpoint=endpoint),
            download_url=optional_str(payload, key="download_url", endpoint=endpoint),
            sha=require_str(payload, key="sha", endpoint=endpoint),
            size=require_int(payload, key="size", endpoint=endpoint),
        )

    @property
    def is_dir(self) -> bool:
        return self.type == CONTENT_TYPE_DIR

    @property
    def is_file(self) -> bool:
        return self.type == CONTENT_TYPE_FILE

    def file(self, client: GitHubGraphClient, sub_path: str) -> Result[File]:
        """Look up ``sub_path`` relative to this entry's path."""
        return client.file(
            self.owner_login,
            self.repository_name,
            self.branch,
            join_segments(self.path, sub_path),
        )

    def files(
        self, client: GitHubGraphClient, sub_path: str | None = None
    ) -> Result[tuple[File, ...]]:
        """List ``sub_path`` relative to this entry, or this directory itself."""
        return client.files_of(
            self.owner_login,
            self.repository_name,
            self.branch,
            join_segments(self.path, sub_path or ""),
        )

    def download(self, client: GitHubGraphClient) -> Result[bytes]:
        """Fetch the entry's bytes from its download URL."""
        if self.download_url is None:
            raise GitHubInputError(
                f"'{self.path}' has no download URL (type '{self.type}')."
            )
        return client.download(self.download_url)

    def raw_file(self, client: GitHubGraphClient) -> RawFile:
        """Address this entry on the raw-content host; requires a known branch."""
        if self.branch is None:
            raise GitHubInputError(
                f"'{self.path}' was looked up without a branch; raw content needs one."
            )
        return client.raw_file(self.owner_login, self.repository_name, self.branch, self.path)


@dataclass(frozen=True, slots=True)
class RawFile:
    """Raw file content addressed by path only; nothing is fetched until ``fetch``."""

    path: ResourcePath

    @property
    def url(self) -> str:
        return self.path.url

    def derive_sub_file(self, sub_path: str) -> RawFile:
        """Address ``sub_path`` below this path. Issues no request."""
        return RawFile(path=self.path.derive(sub_path))

    def fetch(self, client: GitHubGraphClient) -> Result[bytes]:
        """GET the raw bytes. Each call issues a new request."""
        return client.fetch_raw(self.path)
