"""Explicit found/absent outcomes for resource lookups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Generic, NoReturn, TypeVar

from ghgraph.errors import GitHubNotFoundError

T = TypeVar("T")
D = TypeVar("D")


@dataclass(frozen=True, slots=True)
class Found(Generic[T]):
    """A lookup that returned HTTP 200 and decoded successfully."""

    value: T

    found: ClassVar[bool] = True

    def unwrap(self) -> T:
        """Return the decoded value."""
        return self.value

    def value_or(self, default: D) -> T | D:
        return self.value


@dataclass(frozen=True, slots=True)
class NotFound:
    """A lookup that returned any status other than 200.

    A genuine 404 and a failed request (5xx, 401, ...) both land here; the
    status code is kept so callers can tell them apart if they need to.
    """

    url: str
    status_code: int

    found: ClassVar[bool] = False

    def unwrap(self) -> NoReturn:
        """Raise ``GitHubNotFoundError`` for this absent resource."""
        raise GitHubNotFoundError(
            f"Resource not found at '{self.url}' (status {self.status_code}).",
            url=self.url,
            status_code=self.status_code,
        )

    def value_or(self, default: D) -> D:
        return default


Result = Found[T] | NotFound
