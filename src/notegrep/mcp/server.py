"""MCP server exposing notegrep search tools."""

import asyncio
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from notegrep.config import DEFAULT_DATA_DIR, RESULT_PAGE_VIRTUAL
from notegrep.core.engine import GrepEngine, show_version
from notegrep.core.report.session import FileSessionStore
from notegrep.core.search.backends import GitGrepBackend, WalkBackend
from notegrep.core.search.filters import normalize_folder
from notegrep.models.match import Query
from notegrep.protocols import ShellProtocol
from notegrep.shell import CollectingNotifier, SubprocessShell

# --- Core functions (testable without MCP context) ---


def grep_search(
    engine: GrepEngine,
    notifier: CollectingNotifier,
    *,
    pattern: str = "",
    literal: bool = True,
    folder: str = ".",
) -> dict[str, Any]:
    """Search the notes and return the rendered report.

    Args:
        pattern: Literal text or extended regular expression.
        literal: Treat the pattern as literal text.
        folder: Only search below this folder ("." for everything).
    """
    if not pattern:
        return {"error": "No search pattern provided.", "report": None, "notifications": []}

    query = Query(pattern=pattern, literal=literal, folder=normalize_folder(folder))
    report = engine.open_grep(query)
    return {
        "query": query.to_dict(),
        "report": report,
        "notifications": notifier.drain(),
    }


def grep_result(engine: GrepEngine, notifier: CollectingNotifier) -> dict[str, Any]:
    """Render the last search again against the current notes."""
    vfile = engine.read_document(RESULT_PAGE_VIRTUAL)
    return {
        "name": vfile.meta.name,
        "content": vfile.text,
        "size": vfile.meta.size,
        "notifications": notifier.drain(),
    }


def grep_version(notifier: CollectingNotifier, shell: ShellProtocol) -> dict[str, Any]:
    """Report notegrep and git versions."""
    message = show_version(shell, notifier)
    output: dict[str, Any] = {"version": message, "notifications": notifier.drain()}
    if message is None:
        output["error"] = "git is not available"
    return output


# --- MCP Server Setup ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    engine: GrepEngine
    notifier: CollectingNotifier
    shell: SubprocessShell
    search_lock: asyncio.Lock = field(default_factory=asyncio.Lock)


def _resolve_paths() -> tuple[Path, Path]:
    space_env = os.environ.get("NOTEGREP_SPACE")
    space = Path(space_env).expanduser() if space_env else Path.cwd()
    data_dir_env = os.environ.get("NOTEGREP_DATA_DIR")
    data_dir = Path(data_dir_env).expanduser() if data_dir_env else DEFAULT_DATA_DIR
    return space, data_dir


def build_context(space: Path, data_dir: Path, *, backend: str = "git") -> ServerContext:
    shell = SubprocessShell()
    notifier = CollectingNotifier()
    search_backend: GitGrepBackend | WalkBackend
    if backend == "walk":
        search_backend = WalkBackend(space)
    else:
        search_backend = GitGrepBackend(shell, space)
    session = FileSessionStore(data_dir / "session.json")
    engine = GrepEngine(space, search_backend, notifier, session)
    return ServerContext(engine=engine, notifier=notifier, shell=shell)


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Wire the engine on startup."""
    space, data_dir = _resolve_paths()
    backend = os.environ.get("NOTEGREP_BACKEND", "git")
    logger.info("Serving notes from {} ({} backend)", space, backend)
    yield build_context(space, data_dir, backend=backend)


mcp_server = FastMCP(
    "notegrep",
    instructions="""\
notegrep searches a folder of markdown notes line by line and returns a report
grouped by note, most matches first. Each match links to its line and column
(e.g. [[notes/a@L3C7|L3C7]]) and shows the line with the match wrapped in
>>>markers<<<.

## Tips
- Lowercase patterns match case-insensitively; any uppercase letter makes the
  search case-sensitive.
- Set literal=false to use an extended regular expression.
- Use folder="projects/" to restrict the search to one folder.
- grep_result_tool re-runs the last search against the current notes.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def grep_search_tool(
    ctx: Context,
    pattern: str,
    literal: bool = True,
    folder: str = ".",
) -> dict[str, Any]:
    """Search the notes for text or a regular expression.

    Returns a markdown report grouped by note, ranked by match count.

    Args:
        pattern: Text (or extended regex when literal is false) to look for.
        literal: Treat the pattern as literal text.
        folder: Only search below this folder ("." for all notes).
    """
    server_ctx = _ctx(ctx)
    async with server_ctx.search_lock:
        return await asyncio.to_thread(
            grep_search,
            server_ctx.engine,
            server_ctx.notifier,
            pattern=pattern,
            literal=literal,
            folder=folder,
        )


@mcp_server.tool()
async def grep_result_tool(ctx: Context) -> dict[str, Any]:
    """Re-run the last search and return its report."""
    server_ctx = _ctx(ctx)
    async with server_ctx.search_lock:
        return await asyncio.to_thread(grep_result, server_ctx.engine, server_ctx.notifier)


@mcp_server.tool()
async def grep_version_tool(ctx: Context) -> dict[str, Any]:
    """Show notegrep and git versions."""
    server_ctx = _ctx(ctx)
    return grep_version(server_ctx.notifier, server_ctx.shell)


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from notegrep.logging_config import configure_logging

    configure_logging(verbose=False)
    mcp_server.run(transport="stdio")
