"""Immutable request paths and single-separator segment joins."""

from __future__ import annotations

from dataclasses import dataclass

GITHUB_API_BASE_URL = "https://api.github.com/"
GITHUB_RAW_BASE_URL = "https://raw.githubusercontent.com/"
GITHUB_WEB_BASE_URL = "https://github.com/"
SEPARATOR = "/"


def join_segments(*parts: str) -> str:
    """Join path pieces with exactly one separator between non-empty pieces.

    Separators at the edges of each piece are dropped before joining, so
    ``join_segments("docs/", "/readme.md")`` is ``"docs/readme.md"``. Pieces are
    otherwise used verbatim: nothing is escaped or validated.
    """
    pieces = (part.strip(SEPARATOR) for part in parts)
    return SEPARATOR.join(piece for piece in pieces if piece)


@dataclass(frozen=True, slots=True)
class ResourcePath:
    """A base URL plus relative segments and an optional raw query suffix."""

    base: str
    segments: tuple[str, ...] = ()
    query: tuple[tuple[str, str], ...] = ()

    @classmethod
    def of(cls, url: str) -> ResourcePath:
        """Build a path rooted at ``url`` with no segments."""
        return cls(base=url)

    def derive(self, segment: str) -> ResourcePath:
        """Return a new path with ``segment`` appended after one separator."""
        if not segment.strip(SEPARATOR):
            return self
        return ResourcePath(
            base=self.base,
            segments=(*self.segments, segment),
            query=self.query,
        )

    def with_query(self, key: str, value: str) -> ResourcePath:
        """Return a new path with ``key=value`` appended to the query suffix."""
        return ResourcePath(
            base=self.base,
            segments=self.segments,
            query=(*self.query, (key, value)),
        )

    @property
    def relative(self) -> str:
        """Render the segments and query without the base URL."""
        rendered = join_segments(*self.segments)
        if self.query:
            rendered += "?" + "&".join(f"{key}={value}" for key, value in self.query)
        return rendered

    @property
    def url(self) -> str:
        """Render the absolute URL."""
        return self.base.rstrip(SEPARATOR) + SEPARATOR + self.relative

    def __str__(self) -> str:
        return self.url
