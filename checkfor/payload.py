"""Validation of loosely typed tool arguments into a SearchRequest."""

from __future__ import annotations

from typing import Any

from checkfor.constants import DEFAULT_DIRS
from checkfor.errors import McpError
from checkfor.models import SearchRequest

ALLOWED_FIELDS = {
    "dirs",
    "dir",
    "search",
    "ext",
    "exclude",
    "case_insensitive",
    "whole_word",
    "context",
    "hide_filter_stats",
}


def _ensure_payload_dict(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise McpError(
            "INVALID_TYPE",
            "Arguments must be an object.",
            {"type": type(payload).__name__},
        )
    return payload


def _reject_unknown_fields(payload: dict[str, Any], allowed_fields: set[str]) -> None:
    unknown_fields = sorted(set(payload) - allowed_fields)
    if unknown_fields:
        raise McpError(
            "UNKNOWN_FIELD",
            f"Unknown fields are not allowed: {', '.join(unknown_fields)}",
            {"fields": unknown_fields},
        )


def _read_bool(payload: dict[str, Any], key: str) -> bool:
    value = payload.get(key, False)
    if not isinstance(value, bool):
        raise McpError(
            "INVALID_TYPE",
            f"'{key}' must be a boolean.",
            {"field": key, "type": type(value).__name__},
        )
    return value


def _read_string_list(value: Any, key: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise McpError(
            "INVALID_TYPE",
            f"'{key}' must be a string or an array of strings.",
            {"field": key, "type": type(value).__name__},
        )
    for item in value:
        if not isinstance(item, str):
            raise McpError(
                "INVALID_TYPE",
                f"'{key}' must only contain strings.",
                {"field": key, "type": type(item).__name__},
            )
    return list(value)


def _read_dirs(payload: dict[str, Any]) -> tuple[str, ...]:
    if "dirs" in payload and "dir" in payload:
        raise McpError(
            "CONFLICTING_FIELDS",
            "Provide either 'dirs' or 'dir', not both.",
            {"fields": ["dir", "dirs"]},
        )
    key = "dirs" if "dirs" in payload else "dir"
    if key not in payload:
        return DEFAULT_DIRS
    dirs = [item for item in _read_string_list(payload[key], key) if item.strip()]
    return tuple(dirs) or DEFAULT_DIRS


def _read_context(payload: dict[str, Any]) -> int:
    value = payload.get("context", 0)
    # JSON clients may send integral floats such as 2.0.
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise McpError(
            "INVALID_TYPE",
            "'context' must be an integer.",
            {"field": "context", "type": type(value).__name__},
        )
    if value < 0:
        raise McpError(
            "INVALID_CONTEXT",
            "'context' must not be negative.",
            {"context": value},
        )
    return value


def build_search_request(payload: Any) -> SearchRequest:
    """Validate tool arguments and build an immutable SearchRequest."""
    payload = _ensure_payload_dict(payload)
    _reject_unknown_fields(payload, ALLOWED_FIELDS)

    if "search" not in payload:
        raise McpError(
            "MISSING_SEARCH",
            "Missing or invalid 'search' parameter",
            {"fields": ["search"]},
        )
    search = payload["search"]
    if not isinstance(search, str):
        raise McpError(
            "INVALID_TYPE",
            "Missing or invalid 'search' parameter",
            {"field": "search", "type": type(search).__name__},
        )
    if not search:
        raise McpError(
            "INVALID_SEARCH",
            "'search' must be a non-empty string.",
            {"search": search},
        )

    ext = payload.get("ext", "")
    if not isinstance(ext, str):
        raise McpError(
            "INVALID_TYPE",
            "'ext' must be a string.",
            {"field": "ext", "type": type(ext).__name__},
        )

    exclude: list[str] = []
    if "exclude" in payload:
        exclude = [
            term for term in _read_string_list(payload["exclude"], "exclude") if term
        ]

    return SearchRequest(
        search=search,
        dirs=_read_dirs(payload),
        ext=ext,
        exclude=tuple(exclude),
        case_insensitive=_read_bool(payload, "case_insensitive"),
        whole_word=_read_bool(payload, "whole_word"),
        context=_read_context(payload),
        hide_filter_stats=_read_bool(payload, "hide_filter_stats"),
    )
