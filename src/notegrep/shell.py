"""Subprocess runner and notifier used outside of tests."""

import shlex
import subprocess
from pathlib import Path

from loguru import logger

from notegrep.config import DEFAULT_TIMEOUT
from notegrep.errors import ExternalToolError
from notegrep.protocols import ShellResult


class SubprocessShell:
    """Run external commands with a bounded lifetime."""

    def __init__(self, *, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def run(self, cmd: str, args: list[str], *, cwd: Path | None = None) -> ShellResult:
        """Run cmd with args, capturing text output.

        Raises ExternalToolError if the command cannot be started or
        does not finish within the timeout. Non-zero exit codes are
        returned to the caller, who knows which ones are benign.
        """
        argv = [cmd, *args]
        logger.debug("Running: {}", " ".join(map(shlex.quote, argv)))
        try:
            proc = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            msg = f"Command not found: {cmd!r}"
            raise ExternalToolError(msg) from e
        except subprocess.TimeoutExpired as e:
            msg = f"Command {cmd!r} did not finish within {self.timeout}s"
            raise ExternalToolError(msg) from e
        except OSError as e:
            msg = f"Could not run {cmd!r}: {e}"
            raise ExternalToolError(msg) from e
        return ShellResult(stdout=proc.stdout, stderr=proc.stderr, returncode=proc.returncode)


class LogNotifier:
    """Send notifications to the log, which the CLI prints on stderr."""

    def flash(self, message: str, level: str = "info") -> None:
        if level == "error":
            logger.error(message)
        else:
            logger.info(message)


class CollectingNotifier(LogNotifier):
    """Log notifications and keep them until drained, for callers without a terminal."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def flash(self, message: str, level: str = "info") -> None:
        super().flash(message, level)
        self.messages.append((level, message))

    def drain(self) -> list[dict[str, str]]:
        """Return and forget the notifications collected so far."""
        drained = [{"level": level, "message": message} for level, message in self.messages]
        self.messages.clear()
        return drained
