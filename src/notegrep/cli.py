"""CLI for notegrep (search, show the last report, MCP server)."""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from notegrep.config import DEFAULT_DATA_DIR, DEFAULT_TIMEOUT, RESULT_PAGE_VIRTUAL
from notegrep.core.engine import (
    GrepEngine,
    search_regex,
    search_regex_in_folder,
    search_text,
    search_text_in_folder,
    show_version,
)
from notegrep.core.report.session import FileSessionStore
from notegrep.core.search.backends import GitGrepBackend, WalkBackend
from notegrep.core.search.filters import normalize_folder
from notegrep.logging_config import configure_logging
from notegrep.models.match import Query
from notegrep.shell import LogNotifier, SubprocessShell

app = typer.Typer(help="notegrep: search a tree of markdown notes and report every match.")


class Backend(str, Enum):
    git = "git"
    walk = "walk"


SpaceOption = Annotated[
    Path,
    typer.Option("--space", "-s", envvar="NOTEGREP_SPACE", help="Root folder of the notes"),
]
DataDirOption = Annotated[
    Path | None,
    typer.Option(
        "--data-dir", "-d", envvar="NOTEGREP_DATA_DIR", help="Where the last query is kept"
    ),
]
BackendOption = Annotated[
    Backend,
    typer.Option("--backend", "-b", help="git grep, or a built-in directory walk"),
]
TimeoutOption = Annotated[
    float,
    typer.Option("--timeout", "-t", help="Abort the search after this many seconds"),
]
FolderOption = Annotated[
    str | None,
    typer.Option("--folder", "-f", help="Only search below this folder"),
]
PageOption = Annotated[
    str | None,
    typer.Option("--page", "-p", help="Only search the folder of this page"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def build_engine(
    space: Path,
    data_dir: Path | None = None,
    *,
    backend: Backend = Backend.git,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> GrepEngine:
    """Wire an engine with the real shell, log notifications and a file-backed session."""
    root = space.expanduser().resolve()
    if not root.is_dir():
        logger.error("Space folder not found: {}", root)
        raise typer.Exit(1)

    search_backend: GitGrepBackend | WalkBackend
    if backend is Backend.walk:
        search_backend = WalkBackend(root)
    else:
        search_backend = GitGrepBackend(SubprocessShell(timeout=timeout), root)

    session = FileSessionStore((data_dir or DEFAULT_DATA_DIR) / "session.json")
    return GrepEngine(root, search_backend, LogNotifier(), session)


def _run_search(
    *,
    literal: bool,
    pattern: str | None,
    folder: str | None,
    page: str | None,
    engine: GrepEngine,
) -> None:
    label = "Literal text:" if literal else "Regular expression pattern:"
    if pattern is None:
        pattern = typer.prompt(label, default="", show_default=False)
    if not pattern:
        # Nothing to search for
        return

    def prompt(_label: str) -> str | None:
        return pattern

    if page is not None:
        if literal:
            text = search_text_in_folder(engine, prompt, page)
        else:
            text = search_regex_in_folder(engine, prompt, page)
    elif folder is not None:
        query = Query(pattern=pattern, literal=literal, folder=normalize_folder(folder))
        text = engine.open_grep(query)
    elif literal:
        text = search_text(engine, prompt)
    else:
        text = search_regex(engine, prompt)

    if text is None:
        raise typer.Exit(1)
    typer.echo(text, nl=False)


@app.command()
def text(
    pattern: Annotated[str | None, typer.Argument(help="Literal text to search for")] = None,
    folder: FolderOption = None,
    page: PageOption = None,
    space: SpaceOption = Path(),
    data_dir: DataDirOption = None,
    backend: BackendOption = Backend.git,
    timeout: TimeoutOption = DEFAULT_TIMEOUT,
) -> None:
    """Search literal text."""
    engine = build_engine(space, data_dir, backend=backend, timeout=timeout)
    _run_search(literal=True, pattern=pattern, folder=folder, page=page, engine=engine)


@app.command()
def regex(
    pattern: Annotated[str | None, typer.Argument(help="Extended regular expression")] = None,
    folder: FolderOption = None,
    page: PageOption = None,
    space: SpaceOption = Path(),
    data_dir: DataDirOption = None,
    backend: BackendOption = Backend.git,
    timeout: TimeoutOption = DEFAULT_TIMEOUT,
) -> None:
    """Search a regular expression pattern."""
    engine = build_engine(space, data_dir, backend=backend, timeout=timeout)
    _run_search(literal=False, pattern=pattern, folder=folder, page=page, engine=engine)


@app.command()
def show(
    space: SpaceOption = Path(),
    data_dir: DataDirOption = None,
    backend: BackendOption = Backend.git,
    timeout: TimeoutOption = DEFAULT_TIMEOUT,
) -> None:
    """Render the last search again against the current notes."""
    engine = build_engine(space, data_dir, backend=backend, timeout=timeout)
    typer.echo(engine.read_document(RESULT_PAGE_VIRTUAL).text)


@app.command()
def version() -> None:
    """Show notegrep and git versions."""
    message = show_version(SubprocessShell(), LogNotifier())
    if message is None:
        raise typer.Exit(1)
    typer.echo(message)


@app.command()
def serve() -> None:
    """Start the MCP server (stdio transport)."""
    from notegrep.mcp.server import run_mcp_server

    run_mcp_server()
