import pytest

from checkfor.matching import (
    contains_whole_word,
    context_after,
    context_before,
    is_excluded,
    is_word_char,
    matches,
    split_lines,
)

LINES = ["line1", "line2", "line3", "line4", "line5"]


@pytest.mark.parametrize(
    ("text", "word", "expected"),
    [
        ("hello", "hello", True),
        ("hello world", "hello", True),
        ("say hello", "hello", True),
        ("hello, world", "hello", True),
        ("helloworld", "hello", False),
        ("superhello", "hello", False),
        ("hello_world", "hello", False),
        ("hello world", "world", True),
        ("Hello", "hello", False),
        ("log logger log", "log", True),
        ("logger catalog", "log", False),
        ("catalog log", "log", True),
        ("goodbye", "hello", False),
    ],
)
def test_contains_whole_word(text, word, expected):
    assert contains_whole_word(text, word) is expected


def test_is_word_char_accepts_ascii_word_characters():
    word_chars = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
    assert all(is_word_char(char) for char in word_chars)


def test_is_word_char_rejects_punctuation_and_non_ascii():
    non_word_chars = " !@#$%^&*()-+=[]{}|;:'\",.<>?/\\\té"
    assert not any(is_word_char(char) for char in non_word_chars)


def test_matches_case_insensitive_lowers_both_sides():
    assert matches("HELLO again", "Hello", False, True)
    assert not matches("HELLO again", "Hello", False, False)


def test_matches_whole_word_with_case_folding():
    assert matches("A LOG line", "log", True, True)
    assert not matches("LOGGER", "log", True, True)


def test_matches_substring_mode_ignores_boundaries():
    assert matches("catalog", "log", False, False)


@pytest.mark.parametrize(
    ("index", "count", "expected"),
    [
        (3, 2, ["line2", "line3"]),
        (1, 2, ["line1"]),
        (0, 2, []),
        (2, 0, []),
        (2, -1, []),
    ],
)
def test_context_before(index, count, expected):
    assert context_before(LINES, index, count) == expected


@pytest.mark.parametrize(
    ("index", "count", "expected"),
    [
        (2, 2, ["line4", "line5"]),
        (3, 2, ["line5"]),
        (4, 2, []),
        (2, 0, []),
    ],
)
def test_context_after(index, count, expected):
    assert context_after(LINES, index, count) == expected


def test_context_lengths_are_clamped_to_file_bounds():
    for index in range(len(LINES)):
        for count in range(0, 7):
            assert len(context_before(LINES, index, count)) == min(count, index)
            assert len(context_after(LINES, index, count)) == min(
                count, len(LINES) - index - 1
            )


def test_is_excluded_uses_substring_even_for_partial_words():
    assert is_excluded("logger.debug(x)", "logger.debug(x)", ["debug"], False)
    assert is_excluded("catalog", "catalog", ["talo"], False)


def test_is_excluded_respects_case_mode():
    line = "TODO: Remove Later"
    assert not is_excluded(line, line, ["remove"], False)
    assert is_excluded(line, line.lower(), ["REMOVE"], True)


def test_is_excluded_without_terms():
    assert not is_excluded("anything", "anything", [], False)


def test_split_lines_drops_trailing_newline_and_carriage_returns():
    assert split_lines(b"one\r\ntwo\n\nthree\n") == ["one", "two", "", "three"]


def test_split_lines_handles_empty_and_unterminated_content():
    assert split_lines(b"") == []
    assert split_lines(b"single") == ["single"]
    assert split_lines(b"\n") == [""]


def test_split_lines_replaces_invalid_utf8():
    assert split_lines(b"ok \xff bytes") == ["ok \ufffd bytes"]
