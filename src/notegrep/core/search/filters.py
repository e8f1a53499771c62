"""Path normalization and document exclusion rules."""

from collections.abc import Iterable

from notegrep.config import RESULT_PAGE_SAVED, RESULT_PAGE_VIRTUAL


def normalize_path(path: str) -> str:
    """Use forward slashes and drop a leading "./"."""
    forward = path.replace("\\", "/")
    return forward.removeprefix("./")


def folder_of(page: str) -> str:
    """Return the folder a page lives in, keeping the trailing "/" ("" at the root)."""
    return page[: page.rfind("/") + 1]


def should_ignore_folder(folder: str, ignore_folders: Iterable[str]) -> bool:
    """Check a folder against the configured ignore patterns.

    A pattern ending in "/*" ignores every folder starting with the
    pattern minus its "/*" (so "archive/*" also ignores "archived/").
    Any other pattern must equal the folder, which keeps its trailing
    "/": "archive/" matches, "archive" does not.
    """
    normalized = normalize_path(folder)
    for raw_pattern in ignore_folders:
        pattern = normalize_path(raw_pattern)
        if pattern.endswith("/*"):
            if normalized.startswith(pattern[:-2]):
                return True
        elif normalized == pattern:
            return True
    return False


def is_result_page(page: str) -> bool:
    """Report pages must not show up in their own results."""
    return page in (RESULT_PAGE_SAVED, RESULT_PAGE_VIRTUAL)


def is_excluded(page: str, ignore_folders: Iterable[str]) -> bool:
    return is_result_page(page) or should_ignore_folder(folder_of(page), ignore_folders)


def normalize_folder(folder: str | None) -> str:
    """Turn a user-supplied folder into "." or a prefix ending in "/"."""
    if folder is None:
        return "."
    normalized = normalize_path(folder.strip())
    if normalized in ("", "."):
        return "."
    return normalized if normalized.endswith("/") else normalized + "/"


def folder_for_page(page: str) -> str:
    """Search scope for "current folder" searches started from a page."""
    return folder_of(normalize_path(page)) or "."
