"""Request and result types shared by the engine and its front-ends."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from checkfor.constants import DEFAULT_DIRS


@dataclass(frozen=True)
class SearchRequest:
    """Validated search configuration for one invocation."""

    search: str
    dirs: tuple[str, ...] = DEFAULT_DIRS
    ext: str = ""
    exclude: tuple[str, ...] = ()
    case_insensitive: bool = False
    whole_word: bool = False
    context: int = 0
    hide_filter_stats: bool = False

    @property
    def tracks_filter_stats(self) -> bool:
        return bool(self.exclude) and not self.hide_filter_stats


@dataclass(frozen=True)
class Match:
    line: int
    content: str
    context_before: tuple[str, ...] = ()
    context_after: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"line": self.line, "content": self.content}
        if self.context_before:
            data["context_before"] = list(self.context_before)
        if self.context_after:
            data["context_after"] = list(self.context_after)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Match:
        return cls(
            line=int(data["line"]),
            content=data["content"],
            context_before=tuple(data.get("context_before") or ()),
            context_after=tuple(data.get("context_after") or ()),
        )


@dataclass(frozen=True)
class FileResult:
    path: str
    matches: tuple[Match, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "matches": [match.to_dict() for match in self.matches],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileResult:
        return cls(
            path=data["path"],
            matches=tuple(Match.from_dict(item) for item in data["matches"]),
        )


@dataclass(frozen=True)
class DirectoryResult:
    """Per-directory summary; filter counters are zero unless tracked."""

    dir: str
    matches_found: int = 0
    original_matches: int = 0
    filtered_matches: int = 0
    files: tuple[FileResult, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"dir": self.dir, "matches_found": self.matches_found}
        if self.original_matches:
            data["original_matches"] = self.original_matches
        if self.filtered_matches:
            data["filtered_matches"] = self.filtered_matches
        data["files"] = [file_result.to_dict() for file_result in self.files]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DirectoryResult:
        return cls(
            dir=data["dir"],
            matches_found=int(data["matches_found"]),
            original_matches=int(data.get("original_matches", 0)),
            filtered_matches=int(data.get("filtered_matches", 0)),
            files=tuple(FileResult.from_dict(item) for item in data["files"]),
        )


@dataclass(frozen=True)
class SearchResult:
    directories: tuple[DirectoryResult, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "directories": [directory.to_dict() for directory in self.directories]
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchResult:
        return cls(
            directories=tuple(
                DirectoryResult.from_dict(item) for item in data["directories"]
            )
        )
