"""Group, rank and render matches as a markdown report."""

import io
from collections.abc import Iterable

from notegrep.models.match import DocumentResult, Match, Query


def group_matches(per_document: Iterable[tuple[str, list[Match]]]) -> list[DocumentResult]:
    """Merge matches per document, in discovery order.

    Documents without any match are dropped. A document seen twice keeps
    its first position and collects all matches.
    """
    grouped: dict[str, list[Match]] = {}
    for page, matches in per_document:
        if matches:
            grouped.setdefault(page, []).extend(matches)
    return [DocumentResult(document_path=p, matches=tuple(m)) for p, m in grouped.items()]


def rank_results(results: Iterable[DocumentResult]) -> list[DocumentResult]:
    """Most matches first; equal counts keep their discovery order."""
    return sorted(results, key=lambda r: -r.count)


def _location(page: str, match: Match) -> str:
    loc = f"L{match.line_number}C{match.column_number}"
    return f"[[{page}@{loc}|{loc}]]"


def render_report(query: Query, results: Iterable[DocumentResult]) -> str:
    """Render ranked results as markdown.

    Returns:
        A header naming the query (and folder, unless the whole space was
        searched), followed by one section per document listing each match
        as a link to its line and column.
    """
    out = io.StringIO()
    kind = "text" if query.literal else "pattern"
    out.write(f"Search results for {kind} **`{query.pattern}`**\n")
    if query.folder != ".":
        out.write(f"**found inside folder:** {query.folder}\n")

    for result in results:
        noun = "match" if result.count == 1 else "matches"
        out.write(f"\n## [[{result.document_path}]] ({result.count} {noun})\n")
        for match in result.matches:
            out.write(f"* {_location(result.document_path, match)}: {match.highlighted_context}\n")

    return out.getvalue()
