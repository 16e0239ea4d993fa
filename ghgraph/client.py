"""Resource client mapping GitHub REST endpoints onto graph entities."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from ghgraph.config import ClientConfig, build_http_client, get_github_token_with_source
from ghgraph.entities import Branch, File, RawFile, Repository, User
from ghgraph.errors import GitHubSnapshotError
from ghgraph.paths import GITHUB_API_BASE_URL, GITHUB_RAW_BASE_URL, ResourcePath
from ghgraph.result import Found, NotFound, Result
from ghgraph.snapshot import ensure_mapping, ensure_rows

logger = logging.getLogger(__name__)

HTTP_OK = 200
E = TypeVar("E")


class GitHubGraphClient:
    """Entry point for navigating users, repositories, branches and contents.

    Each operation performs one synchronous GET. HTTP 200 is decoded into
    entities; any other status yields ``NotFound``. Transport errors from
    ``httpx`` propagate unchanged.
    """

    def __init__(
        self,
        http: httpx.Client,
        token: str | None = None,
        *,
        api_base: str = GITHUB_API_BASE_URL,
        raw_base: str = GITHUB_RAW_BASE_URL,
    ) -> None:
        self._http = http
        self._token = token
        self.api_base = ResourcePath.of(api_base)
        self.raw_base = ResourcePath.of(raw_base)

    def __enter__(self) -> GitHubGraphClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[no-untyped-def]
        self.close()

    def close(self) -> None:
        """Close the underlying transport."""
        self._http.close()

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    def _headers(self) -> dict[str, str] | None:
        if self._token is None:
            return None
        return {"Authorization": f"Bearer {self._token}"}

    def _get(self, url: str, *, authenticated: bool = True) -> httpx.Response:
        logger.debug("GET %s", url)
        response = self._http.get(url, headers=self._headers() if authenticated else None)
        logger.debug("Response: GET %s (status=%d)", url, response.status_code)
        return response

    def _get_json(self, path: ResourcePath) -> Found[Any] | NotFound:
        """GET an API path and decode the JSON body of a 200 response."""
        url = path.url
        response = self._get(url)
        if response.status_code != HTTP_OK:
            logger.debug("Resource absent: %s (status=%d)", url, response.status_code)
            return NotFound(url=url, status_code=response.status_code)
        try:
            return Found(response.json())
        except ValueError as error:
            raise GitHubSnapshotError(
                "Expected a JSON body in GitHub response.",
                endpoint=url,
            ) from error

    def _get_entity(
        self, path: ResourcePath, decode: Callable[[dict[str, Any], str], E]
    ) -> Result[E]:
        result = self._get_json(path)
        if isinstance(result, NotFound):
            return result
        return Found(decode(ensure_mapping(result.value, endpoint=path.url), path.url))

    def _get_entities(
        self, path: ResourcePath, decode: Callable[[dict[str, Any], str], E]
    ) -> Result[tuple[E, ...]]:
        result = self._get_json(path)
        if isinstance(result, NotFound):
            return result
        rows = ensure_rows(result.value, endpoint=path.url)
        return Found(tuple(decode(row, path.url) for row in rows))

    def user_path(self, login: str) -> ResourcePath:
        return self.api_base.derive("users").derive(login)

    def repository_path(self, owner: str, name: str) -> ResourcePath:
        return self.api_base.derive("repos").derive(owner).derive(name)

    def branch_path(self, owner: str, repo: str, name: str | None = None) -> ResourcePath:
        branches = self.repository_path(owner, repo).derive("branches")
        return branches if name is None else branches.derive(name)

    def contents_path(
        self,
        owner: str,
        repo: str,
        branch: str | None = None,
        path: str | None = None,
    ) -> ResourcePath:
        """Build ``repos/{owner}/{repo}/contents/{path}[?ref={branch}]``."""
        contents = self.repository_path(owner, repo).derive("contents").derive(path or "")
        return contents if branch is None else contents.with_query("ref", branch)

    def user(self, login: str) -> Result[User]:
        """Look up a user by login."""
        return self._get_entity(
            self.user_path(login),
            lambda payload, endpoint: User.from_snapshot(payload, endpoint=endpoint),
        )

    def repository(self, owner: str, name: str) -> Result[Repository]:
        """Look up a repository by owner login and name."""
        return self._get_entity(
            self.repository_path(owner, name),
            lambda payload, endpoint: Repository.from_snapshot(payload, endpoint=endpoint),
        )

    def repositories_of(self, owner: str) -> Result[tuple[Repository, ...]]:
        """List a user's repositories in the order GitHub returns them."""
        return self._get_entities(
            self.user_path(owner).derive("repos"),
            lambda payload, endpoint: Repository.from_snapshot(payload, endpoint=endpoint),
        )

    def branch(self, owner: str, repo: str, name: str) -> Result[Branch]:
        return self._get_entity(
            self.branch_path(owner, repo, name),
            lambda payload, endpoint: Branch.from_snapshot(
                payload, owner_login=owner, repository_name=repo, endpoint=endpoint
            ),
        )

    def branches_of(self, owner: str, repo: str) -> Result[tuple[Branch, ...]]:
        return self._get_entities(
            self.branch_path(owner, repo),
            lambda payload, endpoint: Branch.from_snapshot(
                payload, owner_login=owner, repository_name=repo, endpoint=endpoint
            ),
        )

    def file(
        self,
        owner: str,
        repo: str,
        branch: str | None = None,
        path: str | None = None,
    ) -> Result[File]:
        """Look up one contents entry. A directory listing body is a decode error."""
        return self._get_entity(
            self.contents_path(owner, repo, branch, path),
            lambda payload, endpoint: File.from_snapshot(
                payload,
                owner_login=owner,
                repository_name=repo,
                branch=branch,
                endpoint=endpoint,
            ),
        )

    def files_of(
        self,
        owner: str,
        repo: str,
        branch: str | None = None,
        dir_path: str | None = None,
    ) -> Result[tuple[File, ...]]:
        """List a directory; a path addressing a single file yields one entry."""
        path = self.contents_path(owner, repo, branch, dir_path)
        result = self._get_json(path)
        if isinstance(result, NotFound):
            return result
        endpoint = path.url
        body = result.value
        rows = [body] if isinstance(body, dict) else ensure_rows(body, endpoint=endpoint)
        return Found(
            tuple(
                File.from_snapshot(
                    row,
                    owner_login=owner,
                    repository_name=repo,
                    branch=branch,
                    endpoint=endpoint,
                )
                for row in rows
            )
        )

    def raw_file(self, owner: str, repo: str, branch: str, path: str) -> RawFile:
        """Address raw content at ``{raw}/{owner}/{repo}/{branch}/{path}``. No request."""
        return RawFile(
            path=self.raw_base.derive(owner).derive(repo).derive(branch).derive(path)
        )

    def fetch_raw(self, path: ResourcePath) -> Result[bytes]:
        """GET raw content with the configured credential."""
        return self._fetch_bytes(path.url, authenticated=True)

    def download(self, url: str) -> Result[bytes]:
        """GET a contents entry's ``download_url``; sent without the credential."""
        return self._fetch_bytes(url, authenticated=False)

    def _fetch_bytes(self, url: str, *, authenticated: bool) -> Result[bytes]:
        response = self._get(url, authenticated=authenticated)
        if response.status_code != HTTP_OK:
            logger.debug("Raw content absent: %s (status=%d)", url, response.status_code)
            return NotFound(url=url, status_code=response.status_code)
        return Found(response.content)


def build_graph_client(
    config: ClientConfig | None = None,
    *,
    token: str | None = None,
) -> GitHubGraphClient:
    """Wire a graph client from config, an explicit token, or the environment."""
    resolved = config or ClientConfig.from_env()
    if token is None:
        token, _source = get_github_token_with_source()
    return GitHubGraphClient(
        build_http_client(resolved),
        token,
        api_base=resolved.api_base_url,
        raw_base=resolved.raw_base_url,
    )
