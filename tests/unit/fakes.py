"""Fake implementations for testing the search engine."""

from pathlib import Path

from notegrep.errors import GrepError
from notegrep.models.match import Query
from notegrep.protocols import ShellResult


class FakeShell:
    """In-memory fake for SubprocessShell.

    Returns predefined results per command and records all calls for assertions.
    """

    def __init__(self) -> None:
        self.results: dict[str, ShellResult | Exception] = {}
        self.calls: list[tuple[str, list[str], Path | None]] = []

    def add_result(
        self, cmd: str, stdout: str = "", *, returncode: int = 0, stderr: str = ""
    ) -> None:
        """Register the result of running a command."""
        self.results[cmd] = ShellResult(stdout=stdout, stderr=stderr, returncode=returncode)

    def add_error(self, cmd: str, error: Exception) -> None:
        """Make a command raise instead of returning."""
        self.results[cmd] = error

    def run(self, cmd: str, args: list[str], *, cwd: Path | None = None) -> ShellResult:
        self.calls.append((cmd, args, cwd))
        if cmd not in self.results:
            msg = f"FakeShell: no result registered for {cmd!r}"
            raise KeyError(msg)
        result = self.results[cmd]
        if isinstance(result, Exception):
            raise result
        return result


class FakeNotifier:
    """Record notifications instead of showing them."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def flash(self, message: str, level: str = "info") -> None:
        self.messages.append((level, message))

    @property
    def errors(self) -> list[str]:
        return [m for level, m in self.messages if level == "error"]


class FakeBackend:
    """Return canned grouped output, or raise a canned error."""

    def __init__(self, output: str = "", error: GrepError | None = None) -> None:
        self.output = output
        self.error = error
        self.calls: list[tuple[Query, bool]] = []

    def search(self, query: Query, *, case_sensitive: bool) -> str:
        self.calls.append((query, case_sensitive))
        if self.error is not None:
            raise self.error
        return self.output
