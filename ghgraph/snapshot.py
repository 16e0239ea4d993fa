"""Helpers that read typed fields out of decoded JSON snapshots."""

from __future__ import annotations

from typing import Any

from ghgraph.errors import GitHubSnapshotError


def ensure_mapping(value: object, *, endpoint: str) -> dict[str, Any]:
    """Ensure a response fragment is a JSON object."""
    if not isinstance(value, dict):
        raise GitHubSnapshotError(
            "Expected JSON object in GitHub response.",
            endpoint=endpoint,
        )
    return value


def ensure_rows(value: object, *, endpoint: str) -> list[dict[str, Any]]:
    """Ensure a response body is a JSON array of objects."""
    if not isinstance(value, list):
        raise GitHubSnapshotError(
            "Expected JSON array in GitHub response.",
            endpoint=endpoint,
        )
    rows: list[dict[str, Any]] = []
    for item in value:
        if not isinstance(item, dict):
            raise GitHubSnapshotError(
                "Expected all array items to be JSON objects in GitHub response.",
                endpoint=endpoint,
            )
        rows.append(item)
    return rows


def require_str(payload: dict[str, Any], *, key: str, endpoint: str) -> str:
    """Read a required string field from payload."""
    value = payload.get(key)
    if not isinstance(value, str):
        raise GitHubSnapshotError(
            f"Expected string field '{key}' in GitHub response.",
            endpoint=endpoint,
            key=key,
        )
    return value


def require_int(payload: dict[str, Any], *, key: str, endpoint: str) -> int:
    """Read a required integer field from payload."""
    value = payload.get(key)
    if not isinstance(value, int) or isinstance(value, bool):
        raise GitHubSnapshotError(
            f"Expected integer field '{key}' in GitHub response.",
            endpoint=endpoint,
            key=key,
        )
    return value


def require_bool(payload: dict[str, Any], *, key: str, endpoint: str) -> bool:
    """Read a required boolean field from payload."""
    value = payload.get(key)
    if not isinstance(value, bool):
        raise GitHubSnapshotError(
            f"Expected boolean field '{key}' in GitHub response.",
            endpoint=endpoint,
            key=key,
        )
    return value


def require_object(payload: dict[str, Any], *, key: str, endpoint: str) -> dict[str, Any]:
    """Read a required object field from payload."""
    value = payload.get(key)
    if not isinstance(value, dict):
        raise GitHubSnapshotError(
            f"Expected object field '{key}' in GitHub response.",
            endpoint=endpoint,
            key=key,
        )
    return value


def optional_str(payload: dict[str, Any], *, key: str, endpoint: str) -> str | None:
    """Read a string field that may be missing or null."""
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        raise GitHubSnapshotError(
            f"Expected '{key}' to be a string or null in GitHub response.",
            endpoint=endpoint,
            key=key,
        )
    return value


def optional_int(payload: dict[str, Any], *, key: str, endpoint: str) -> int | None:
    """Read an integer field that may be missing or null."""
    value = payload.get(key)
    if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
        raise GitHubSnapshotError(
            f"Expected '{key}' to be an integer or null in GitHub response.",
            endpoint=endpoint,
            key=key,
        )
    return value
