"""Recover every occurrence, and its exact column, from line-level hits."""

import re
from collections.abc import Iterable, Iterator

from notegrep.errors import PatternError
from notegrep.models.match import Match, Query, RawLineHit


def compile_matcher(query: Query, *, case_sensitive: bool) -> re.Pattern[str]:
    """Build the in-process pattern matching the same text as the search tool."""
    expr = re.escape(query.pattern) if query.literal else query.pattern
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(expr, flags)
    except re.error as e:
        msg = f"Invalid pattern {query.pattern!r}: {e}"
        raise PatternError(msg) from e


def refine_line(
    hit: RawLineHit,
    matcher: re.Pattern[str],
    *,
    left: str = "",
    right: str = "",
) -> Iterator[Match]:
    """Yield one Match per non-overlapping occurrence on the hit's line.

    Each occurrence gets its own copy of the line with only that
    occurrence wrapped in the surround markers.
    """
    context = hit.context_text
    for m in matcher.finditer(context):
        start, end = m.span()
        yield Match(
            line_number=hit.line_number,
            column_number=start + 1,
            highlighted_context="".join(
                (context[:start], left, context[start:end], right, context[end:])
            ),
        )


def refine_hits(
    hits: Iterable[RawLineHit],
    matcher: re.Pattern[str],
    *,
    left: str = "",
    right: str = "",
) -> list[Match]:
    """Expand line hits into matches, keeping line-then-column order."""
    return [m for hit in hits for m in refine_line(hit, matcher, left=left, right=right)]
