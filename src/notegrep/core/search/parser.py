"""Parse grouped `git grep --heading --break` output."""

import re
from collections.abc import Iterator

from loguru import logger

from notegrep.config import DOCUMENT_EXTENSION
from notegrep.core.search.filters import normalize_path
from notegrep.models.match import RawLineHit

_LOCATION_RE = re.compile(r"^(\d+):(\d+):")


def parse_location(line: str) -> tuple[int, int, str] | None:
    """Split a "<line>:<column>:<text>" body line.

    Returns:
        (line_number, column_hint, context_text), or None for lines
        without a location prefix (e.g. context or separator lines).
    """
    m = _LOCATION_RE.match(line)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2)), line[m.end() :]


def parse_grep_output(output: str) -> Iterator[tuple[str, list[RawLineHit]]]:
    """Yield (document_path, hits) for each document group in the output.

    Groups are separated by an empty line; the first line of a group is the
    file path. Files without the document extension are skipped.
    """
    for group in output.split("\n\n"):
        lines = group.split("\n")
        header = lines[0]
        if not header.endswith(DOCUMENT_EXTENSION):
            if header.strip():
                logger.debug("Skipping non-document group {!r}", header)
            continue
        page = normalize_path(header[: -len(DOCUMENT_EXTENSION)])

        hits: list[RawLineHit] = []
        for line in lines[1:]:
            location = parse_location(line)
            if location is None:
                continue
            line_number, column_hint, context = location
            hits.append(
                RawLineHit(
                    document_path=page,
                    line_number=line_number,
                    raw_column_hint=column_hint,
                    context_text=context,
                )
            )
        yield page, hits
