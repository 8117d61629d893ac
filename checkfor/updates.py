"""Release update check with a small on-disk cache."""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

import httpx

from checkfor.constants import (
    SERVER_NAME,
    UPDATE_CACHE_FILENAME,
    UPDATE_CACHE_TTL_SECONDS,
)

logger = logging.getLogger(__name__)

_LEADING_DIGITS = re.compile(r"\d+")


class UpdateCheckError(RuntimeError):
    """Raised when the latest release cannot be determined."""


@dataclass(frozen=True)
class UpdateStatus:
    current: str
    latest: str

    @property
    def update_available(self) -> bool:
        return compare_versions(self.latest, self.current) > 0


def _version_parts(version: str) -> list[int]:
    parts = []
    for segment in version.strip().lstrip("vV").split("."):
        match = _LEADING_DIGITS.match(segment)
        parts.append(int(match.group()) if match else 0)
    return parts


def compare_versions(left: str, right: str) -> int:
    """Compare dotted versions, ignoring a leading 'v'. Returns -1, 0 or 1."""
    left_parts = _version_parts(left)
    right_parts = _version_parts(right)
    width = max(len(left_parts), len(right_parts))
    left_parts += [0] * (width - len(left_parts))
    right_parts += [0] * (width - len(right_parts))
    if left_parts == right_parts:
        return 0
    return 1 if left_parts > right_parts else -1


def update_cache_path() -> Path:
    """Return the per-user cache file used to remember the last check."""
    if sys.platform.startswith("win"):
        base = os.environ.get("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = str(Path.home() / "Library" / "Caches")
    else:
        base = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / SERVER_NAME / UPDATE_CACHE_FILENAME


def _read_cache(cache_path: Path, now: datetime) -> str | None:
    try:
        data = json.loads(cache_path.read_text(encoding="utf-8"))
        checked_at = datetime.fromisoformat(data["checked_at"])
        latest = data["latest"]
        expired = now - checked_at > timedelta(seconds=UPDATE_CACHE_TTL_SECONDS)
    except (OSError, ValueError, KeyError, TypeError):
        return None
    if expired or not isinstance(latest, str):
        return None
    return latest


def _write_cache(cache_path: Path, latest: str, now: datetime) -> None:
    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(
            json.dumps({"checked_at": now.isoformat(), "latest": latest}),
            encoding="utf-8",
        )
    except OSError as exc:
        logger.warning("could not write update cache %s: %s", cache_path, exc)


def _fetch_latest(url: str, client: httpx.Client) -> str:
    try:
        response = client.get(url, headers={"Accept": "application/json"})
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise UpdateCheckError(f"failed to fetch release info: {exc}") from exc
    tag = data.get("tag_name") if isinstance(data, dict) else None
    if not isinstance(tag, str) or not tag.strip():
        raise UpdateCheckError("release info does not contain a tag_name")
    return tag.strip()


def check_for_update(
    current: str,
    url: str,
    *,
    client: httpx.Client | None = None,
    cache_path: Path | None = None,
    now: datetime | None = None,
) -> UpdateStatus:
    """Look up the latest release, reusing a cached answer for a day."""
    cache_path = cache_path or update_cache_path()
    now = now or datetime.now(timezone.utc)

    latest = _read_cache(cache_path, now)
    if latest is None:
        owns_client = client is None
        http = (
            httpx.Client(timeout=10.0, follow_redirects=True)
            if owns_client
            else client
        )
        try:
            latest = _fetch_latest(url, http)
        finally:
            if owns_client:
                http.close()
        _write_cache(cache_path, latest, now)

    return UpdateStatus(current=current, latest=latest)
