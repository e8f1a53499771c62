"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from notegrep.config import GrepConfig
from notegrep.core.engine import GrepEngine
from notegrep.core.report.session import ReportSession
from notegrep.core.search.backends import WalkBackend
from notegrep.protocols import SearchBackendProtocol
from tests.unit.fakes import FakeNotifier

SPACE_FILES = {
    "notes/a.md": "a todo item\nanother TODO here\n",
    "notes/b.md": "todo: todo, todo\nnothing to see\n",
    "projects/plan.md": "# Plan\nship it, then todo\n",
    "archive/old.md": "legacy only here\n",
    "readme.txt": "todo in a text file\n",
}


@pytest.fixture
def space(tmp_path: Path) -> Path:
    """Return a small notes tree."""
    root = tmp_path / "space"
    for name, contents in SPACE_FILES.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, encoding="utf-8")
    return root


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def make_engine(
    space: Path, notifier: FakeNotifier
) -> Callable[..., GrepEngine]:
    """Build an engine over the space with a fixed config."""

    def _make(
        config: GrepConfig | None = None,
        backend: SearchBackendProtocol | None = None,
    ) -> GrepEngine:
        return GrepEngine(
            space,
            backend or WalkBackend(space),
            notifier,
            ReportSession(),
            config_loader=lambda _space: config or GrepConfig(),
        )

    return _make


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own config out of the tests."""
    monkeypatch.setattr("notegrep.config.USER_CONFIG_FILE", tmp_path / "no-user-config.json")
