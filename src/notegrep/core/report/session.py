"""Stores for the most recently issued query."""

import json
import threading
from pathlib import Path

from loguru import logger

from notegrep.errors import MalformedSessionError
from notegrep.models.match import Query


class ReportSession:
    """Hold the last query in memory, for replay by the virtual report."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._query: Query | None = None

    def remember(self, query: Query) -> None:
        with self._lock:
            self._query = query

    def current(self) -> Query:
        with self._lock:
            query = self._query
        if query is None:
            msg = "No search has been run yet"
            raise MalformedSessionError(msg)
        return query


class FileSessionStore:
    """Hold the last query in a JSON file, so another process can replay it.

    The file is replaced atomically: a reader sees either the old or
    the new query, never a partial write.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def remember(self, query: Query) -> None:
        contents = json.dumps(query.to_dict(), sort_keys=True, indent=4) + "\n"
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_name(self.path.name + ".tmp")
            tmp.write_text(contents, encoding="utf-8")
            tmp.replace(self.path)
        logger.debug("Stored query in {}", self.path)

    def current(self) -> Query:
        with self._lock:
            try:
                contents = self.path.read_text(encoding="utf-8")
            except FileNotFoundError as e:
                msg = "No search has been run yet"
                raise MalformedSessionError(msg) from e
        try:
            data = json.loads(contents)
        except json.JSONDecodeError as e:
            msg = f"Stored query in {str(self.path)!r} is not valid JSON"
            raise MalformedSessionError(msg) from e
        return Query.from_dict(data)
