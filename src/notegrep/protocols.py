"""Protocols for dependency injection in the search engine."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from notegrep.models.match import Query


@dataclass(frozen=True)
class ShellResult:
    """Captured output of a finished command."""

    stdout: str
    stderr: str
    returncode: int


@runtime_checkable
class ShellProtocol(Protocol):
    """Protocol for running external commands."""

    def run(self, cmd: str, args: list[str], *, cwd: Path | None = None) -> ShellResult:
        """Run a command to completion and capture its output."""
        ...


@runtime_checkable
class NotifierProtocol(Protocol):
    """Protocol for user-facing notifications."""

    def flash(self, message: str, level: str = "info") -> None:
        """Show a short message to the user."""
        ...


@runtime_checkable
class SearchBackendProtocol(Protocol):
    """Protocol for line-oriented search backends."""

    def search(self, query: Query, *, case_sensitive: bool) -> str:
        """Return grouped search output for the query."""
        ...


@runtime_checkable
class SessionProtocol(Protocol):
    """Protocol for stores holding the last issued query."""

    def remember(self, query: Query) -> None:
        """Replace the stored query."""
        ...

    def current(self) -> Query:
        """Return the stored query, raising MalformedSessionError if unusable."""
        ...
