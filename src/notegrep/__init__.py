"""Search a tree of markdown notes and report every match."""

from notegrep.config import VERSION, GrepConfig
from notegrep.core.engine import GrepEngine
from notegrep.core.report.session import FileSessionStore, ReportSession
from notegrep.core.search.backends import GitGrepBackend, WalkBackend
from notegrep.models.match import Query
from notegrep.protocols import NotifierProtocol, SearchBackendProtocol, ShellProtocol

__version__ = VERSION

__all__ = [
    "FileSessionStore",
    "GitGrepBackend",
    "GrepConfig",
    "GrepEngine",
    "NotifierProtocol",
    "Query",
    "ReportSession",
    "SearchBackendProtocol",
    "ShellProtocol",
    "WalkBackend",
]
