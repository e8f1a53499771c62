"""Tests for the query and report models."""

import pytest

from notegrep.errors import MalformedSessionError
from notegrep.models.match import DocumentResult, Match, Query, Report


def test_query_requires_pattern() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        Query("")


@pytest.mark.parametrize("folder", ["notes", ""])
def test_query_folder_must_be_root_or_end_in_slash(folder: str) -> None:
    with pytest.raises(ValueError, match="must be"):
        Query("x", folder=folder)


def test_query_from_dict_rejects_unscoped_folder() -> None:
    with pytest.raises(MalformedSessionError, match="invalid"):
        Query.from_dict({"pattern": "x", "folder": "notes"})


def test_query_dict_roundtrip() -> None:
    query = Query("t.do", literal=False, folder="notes/")
    assert Query.from_dict(query.to_dict()) == query


def test_query_from_dict_defaults() -> None:
    assert Query.from_dict({"pattern": "x"}) == Query("x", literal=False, folder=".")


def test_query_from_non_mapping_is_malformed() -> None:
    with pytest.raises(MalformedSessionError):
        Query.from_dict(None)


def test_report_counts_matches() -> None:
    match = Match(line_number=1, column_number=1, highlighted_context="x")
    report = Report(
        query=Query("x"),
        document_results=(
            DocumentResult(document_path="a", matches=(match, match)),
            DocumentResult(document_path="b", matches=(match,)),
        ),
        generated_text="",
    )
    assert report.match_count == 3
    assert report.document_results[0].count == 2
