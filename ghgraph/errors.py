"""Typed errors raised by the resource graph client."""

from __future__ import annotations


class GitHubInputError(ValueError):
    """Raised when caller-supplied identifiers or paths are invalid."""


class GitHubSnapshotError(RuntimeError):
    """Raised when a 200 response body cannot be decoded into an entity."""

    def __init__(self, message: str, *, endpoint: str, key: str | None = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.key = key


class GitHubNotFoundError(LookupError):
    """Raised when an absent result is unwrapped."""

    def __init__(self, message: str, *, url: str, status_code: int) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
