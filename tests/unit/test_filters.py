"""Tests for path normalization and folder exclusion."""

import pytest

from notegrep.core.search.filters import (
    folder_for_page,
    folder_of,
    is_excluded,
    is_result_page,
    normalize_folder,
    normalize_path,
    should_ignore_folder,
)


def test_normalize_path_converts_backslashes_and_strips_dot_slash() -> None:
    assert normalize_path(".\\notes\\a") == "notes/a"
    assert normalize_path("./notes/a") == "notes/a"
    assert normalize_path("notes/a") == "notes/a"


def test_folder_of_keeps_trailing_slash() -> None:
    assert folder_of("notes/sub/a") == "notes/sub/"
    assert folder_of("a") == ""


@pytest.mark.parametrize(
    ("folder", "expected"),
    [
        ("archive/", True),
        ("archive/2019/", True),
        ("archived/", True),
        ("notes/", False),
    ],
)
def test_wildcard_pattern_ignores_prefixed_folders(folder: str, expected: bool) -> None:
    assert should_ignore_folder(folder, ["archive/*"]) is expected


def test_exact_pattern_must_equal_the_folder() -> None:
    assert should_ignore_folder("archive/", ["archive/"]) is True
    assert should_ignore_folder("archive/", ["archive"]) is False
    assert should_ignore_folder("archive/2019/", ["archive"]) is False


def test_windows_style_patterns_are_normalized() -> None:
    assert should_ignore_folder("archive/old/", ["archive\\*"]) is True
    assert should_ignore_folder("archive/old/", ["archive\\old\\"]) is True


def test_no_patterns_ignores_nothing() -> None:
    assert should_ignore_folder("archive/", []) is False


def test_result_pages_are_always_excluded() -> None:
    assert is_result_page("GREP RESULT") is True
    assert is_result_page("GREP RESULT 🔍") is True
    assert is_result_page("notes/GREP RESULT") is False
    assert is_excluded("GREP RESULT", ()) is True


def test_is_excluded_checks_the_page_folder() -> None:
    assert is_excluded("archive/old", ["archive/*"]) is True
    assert is_excluded("notes/a", ["archive/*"]) is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, "."),
        ("", "."),
        (".", "."),
        ("./", "."),
        ("notes", "notes/"),
        ("notes/", "notes/"),
        (".\\notes\\sub", "notes/sub/"),
    ],
)
def test_normalize_folder(raw: str | None, expected: str) -> None:
    assert normalize_folder(raw) == expected


def test_folder_for_page() -> None:
    assert folder_for_page("notes/sub/page") == "notes/sub/"
    assert folder_for_page("page") == "."
