"""Line-oriented search backends producing grouped `git grep` style output."""

import os
from pathlib import Path

from loguru import logger

from notegrep.config import DOCUMENT_EXTENSION
from notegrep.core.search.refiner import compile_matcher
from notegrep.errors import ExternalToolError, NoResultsError
from notegrep.models.match import Query
from notegrep.protocols import ShellProtocol

# git grep exits with 1 when nothing matched
_GIT_NO_MATCH = 1


def _pathspec(folder: str) -> str:
    prefix = "./" if folder == "." else folder
    return prefix + "*" + DOCUMENT_EXTENSION


def build_git_args(query: Query, *, case_sensitive: bool) -> list[str]:
    """Arguments for `git grep` over plain files, grouped by file."""
    return [
        "-c",  # modify config for this command only
        "core.quotePath=false",  # keep non-ASCII paths readable
        "grep",
        "--heading",  # group by file
        "--break",  # empty line between files
        "--line-number",
        "--column",
        "--no-color",
        "--no-index",  # search like plain grep, no git-specific features
        *([] if case_sensitive else ["--ignore-case"]),
        "--fixed-strings" if query.literal else "--extended-regexp",
        "-e",  # pattern may start with "-"
        query.pattern,
        "--",
        _pathspec(query.folder),
    ]


class GitGrepBackend:
    """Delegate the tree search to `git grep --no-index`."""

    def __init__(self, shell: ShellProtocol, root: Path) -> None:
        self._shell = shell
        self.root = root

    def search(self, query: Query, *, case_sensitive: bool) -> str:
        """Run git grep in the space root.

        Raises:
            ExternalToolError: git is missing or failed.
            NoResultsError: git ran but found nothing.
        """
        result = self._shell.run(
            "git", build_git_args(query, case_sensitive=case_sensitive), cwd=self.root
        )
        if result.returncode == _GIT_NO_MATCH and not result.stdout:
            msg = f"No matches for {query.pattern!r}"
            raise NoResultsError(msg)
        if result.returncode not in (0, _GIT_NO_MATCH):
            # git follows the error with its full usage text
            first_line = next(iter(result.stderr.strip().splitlines()), "")
            msg = f"git grep failed with exit code {result.returncode}: {first_line}"
            raise ExternalToolError(msg)
        if not result.stdout:
            msg = f"No matches for {query.pattern!r}"
            raise NoResultsError(msg)
        return result.stdout


class WalkBackend:
    """Search the space in-process, emitting the same output as GitGrepBackend.

    Hidden directories are skipped and files are visited in sorted order,
    so output is stable for a given tree.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def search(self, query: Query, *, case_sensitive: bool) -> str:
        matcher = compile_matcher(query, case_sensitive=case_sensitive)
        base = self.root if query.folder == "." else self.root / query.folder
        if not base.is_dir():
            msg = f"Folder not found: {str(base)!r}"
            raise ExternalToolError(msg)

        groups: list[str] = []
        for dirpath, dirnames, filenames in os.walk(base):
            dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
            for fname in sorted(filenames):
                if not fname.endswith(DOCUMENT_EXTENSION):
                    continue
                path = Path(dirpath) / fname
                try:
                    text = path.read_text(encoding="utf-8", errors="replace")
                except OSError as e:
                    msg = f"Could not read {str(path)!r}: {e}"
                    raise ExternalToolError(msg) from e

                lines = text.split("\n")
                if text.endswith("\n"):
                    lines.pop()
                body: list[str] = []
                for lnum, line in enumerate(lines, start=1):
                    m = matcher.search(line)
                    if m:
                        body.append(f"{lnum}:{m.start() + 1}:{line}")
                if body:
                    groups.append("\n".join([path.relative_to(self.root).as_posix(), *body]))

        logger.debug("Walk search found {} files with hits", len(groups))
        if not groups:
            msg = f"No matches for {query.pattern!r}"
            raise NoResultsError(msg)
        return "\n\n".join(groups) + "\n"
