"""Line splitting, term matching, context windows and exclusion checks."""

from __future__ import annotations

import string
from typing import Sequence

WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def split_lines(data: bytes) -> list[str]:
    """Decode file bytes into newline-delimited lines.

    A trailing newline does not produce an extra empty line, and a carriage
    return before the newline is dropped so CRLF files report clean content.
    """
    text = data.decode("utf-8", errors="replace")
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def is_word_char(char: str) -> bool:
    return char in WORD_CHARS


def contains_whole_word(text: str, word: str) -> bool:
    """Return True when ``word`` occurs in ``text`` bounded by non-word chars."""
    start = text.find(word)
    while start != -1:
        end = start + len(word)
        before_ok = start == 0 or not is_word_char(text[start - 1])
        after_ok = end >= len(text) or not is_word_char(text[end])
        if before_ok and after_ok:
            return True
        start = text.find(word, start + 1)
    return False


def normalize(text: str, case_insensitive: bool) -> str:
    return text.lower() if case_insensitive else text


def matches(line: str, term: str, whole_word: bool, case_insensitive: bool) -> bool:
    line = normalize(line, case_insensitive)
    term = normalize(term, case_insensitive)
    if whole_word:
        return contains_whole_word(line, term)
    return term in line


def context_before(lines: Sequence[str], index: int, count: int) -> list[str]:
    if count <= 0:
        return []
    return list(lines[max(0, index - count) : index])


def context_after(lines: Sequence[str], index: int, count: int) -> list[str]:
    if count <= 0:
        return []
    return list(lines[index + 1 : min(len(lines), index + count + 1)])


def is_excluded(
    line: str,
    normalized_line: str,
    exclusion_terms: Sequence[str],
    case_insensitive: bool,
) -> bool:
    """Check exclusion terms by substring, ignoring the whole-word setting."""
    haystack = normalized_line if case_insensitive else line
    for term in exclusion_terms:
        if normalize(term, case_insensitive) in haystack:
            return True
    return False
