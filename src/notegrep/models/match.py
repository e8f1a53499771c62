"""Domain models for search queries and their results."""

from dataclasses import dataclass
from typing import Any

from notegrep.errors import MalformedSessionError


@dataclass(frozen=True)
class Query:
    """A single search request, as issued by the user."""

    pattern: str
    literal: bool = False
    # "." for the whole space, otherwise a folder prefix ending in "/"
    folder: str = "."

    def __post_init__(self) -> None:
        if not self.pattern:
            msg = "Query pattern must not be empty"
            raise ValueError(msg)
        if self.folder != "." and not self.folder.endswith("/"):
            msg = f"Query folder must be \".\" or end in \"/\": {self.folder!r}"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        return {"pattern": self.pattern, "literal": self.literal, "folder": self.folder}

    @classmethod
    def from_dict(cls, data: Any) -> "Query":
        """Rebuild a stored query, raising MalformedSessionError if it is unusable."""
        if not isinstance(data, dict):
            msg = f"Stored query is not an object: {data!r}"
            raise MalformedSessionError(msg)
        pattern = data.get("pattern")
        literal = data.get("literal", False)
        folder = data.get("folder", ".")
        if not isinstance(pattern, str) or not pattern:
            msg = f"Stored query has no pattern: {data!r}"
            raise MalformedSessionError(msg)
        if not isinstance(literal, bool) or not isinstance(folder, str):
            msg = f"Stored query has bad field types: {data!r}"
            raise MalformedSessionError(msg)
        try:
            return cls(pattern=pattern, literal=literal, folder=folder)
        except ValueError as e:
            msg = f"Stored query is invalid: {e}"
            raise MalformedSessionError(msg) from e


@dataclass(frozen=True)
class RawLineHit:
    """One line of search tool output, attributed to a document."""

    document_path: str
    line_number: int
    raw_column_hint: int
    context_text: str


@dataclass(frozen=True)
class Match:
    """A single occurrence of the pattern."""

    line_number: int
    column_number: int
    highlighted_context: str


@dataclass(frozen=True)
class DocumentResult:
    """All matches found in one document, in line-then-column order."""

    document_path: str
    matches: tuple[Match, ...]

    @property
    def count(self) -> int:
        return len(self.matches)


@dataclass(frozen=True)
class Report:
    """A fully rendered search report."""

    query: Query
    document_results: tuple[DocumentResult, ...]
    generated_text: str

    @property
    def match_count(self) -> int:
        return sum(r.count for r in self.document_results)
