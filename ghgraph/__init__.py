"""Navigable, immutable snapshots of the GitHub REST resource hierarchy."""

from ghgraph.client import GitHubGraphClient, build_graph_client
from ghgraph.config import ClientConfig, build_http_client, get_github_token_with_source
from ghgraph.entities import Branch, File, RawFile, Repository, User
from ghgraph.errors import GitHubInputError, GitHubNotFoundError, GitHubSnapshotError
from ghgraph.paths import ResourcePath, join_segments
from ghgraph.result import Found, NotFound, Result

__all__ = [
    "Branch",
    "ClientConfig",
    "File",
    "Found",
    "GitHubGraphClient",
    "GitHubInputError",
    "GitHubNotFoundError",
    "GitHubSnapshotError",
    "NotFound",
    "RawFile",
    "Repository",
    "ResourcePath",
    "Result",
    "User",
    "build_graph_client",
    "build_http_client",
    "get_github_token_with_source",
    "join_segments",
]
