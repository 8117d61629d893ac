"""File and directory scanning over a single directory level."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from checkfor.errors import DirectoryListingError
from checkfor.matching import (
    context_after,
    context_before,
    is_excluded,
    matches,
    normalize,
    split_lines,
)
from checkfor.models import (
    DirectoryResult,
    FileResult,
    Match,
    SearchRequest,
    SearchResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileScan:
    matches: tuple[Match, ...]
    raw_count: int
    filtered_count: int


def scan_file(path: Path | str, request: SearchRequest) -> FileScan:
    """Scan one file line by line.

    Raises OSError when the file cannot be opened or read; callers decide
    whether that is fatal.
    """
    lines = split_lines(Path(path).read_bytes())

    found: list[Match] = []
    raw_count = 0
    filtered_count = 0
    for index, line in enumerate(lines):
        if not matches(
            line, request.search, request.whole_word, request.case_insensitive
        ):
            continue
        raw_count += 1

        normalized_line = normalize(line, request.case_insensitive)
        if is_excluded(
            line, normalized_line, request.exclude, request.case_insensitive
        ):
            filtered_count += 1
            continue

        if request.context > 0:
            match = Match(
                line=index + 1,
                content=line,
                context_before=tuple(context_before(lines, index, request.context)),
                context_after=tuple(context_after(lines, index, request.context)),
            )
        else:
            match = Match(line=index + 1, content=line)
        found.append(match)

    return FileScan(
        matches=tuple(found), raw_count=raw_count, filtered_count=filtered_count
    )


def _list_files(directory: str) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        raise DirectoryListingError(directory, exc.strerror or str(exc)) from exc
    return [entry for entry in entries if not entry.is_dir()]


def scan_directory(directory: str, request: SearchRequest) -> DirectoryResult:
    """Scan the immediate files of ``directory``; subdirectories are skipped."""
    files: list[FileResult] = []
    original_matches = 0
    filtered_matches = 0

    for entry in _list_files(directory):
        if request.ext and not entry.name.endswith(request.ext):
            continue

        full_path = os.path.join(directory, entry.name)
        try:
            scan = scan_file(full_path, request)
        except OSError as exc:
            logger.warning("failed to search %s: %s", full_path, exc)
            continue

        if request.tracks_filter_stats:
            original_matches += scan.raw_count
            filtered_matches += scan.filtered_count

        if scan.matches:
            files.append(FileResult(path=entry.name, matches=scan.matches))

    return DirectoryResult(
        dir=directory,
        matches_found=sum(len(file_result.matches) for file_result in files),
        original_matches=original_matches,
        filtered_matches=filtered_matches,
        files=tuple(files),
    )


def scan_all(request: SearchRequest) -> SearchResult:
    """Scan every requested directory in order; a listing failure aborts."""
    directories: list[DirectoryResult] = []
    for directory in request.dirs:
        logger.debug("scanning %s for %r", directory, request.search)
        directories.append(scan_directory(directory, request))
    return SearchResult(directories=tuple(directories))
