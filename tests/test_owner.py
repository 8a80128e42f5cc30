"""Tests de la détection de la colonne email de l'agent."""

import pytest

from fieldmap.matching.owner import detect_owner_email_column, rows_to_matrix, score_owner_header


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Agent Email", 95),
        ("agent_email", 95),
        ("Assigned Agent", 95),
        ("Broker E-mail Addr", 85),
        ("Owner Mail", 85),
        ("Owner Gmail", 75),
        ("AssignedAgent", 70),
        ("Sales Rep", 55),
        ("Contact", 0),
        ("   ", 0),
    ],
)
def test_score_owner_header(header: str, expected: int) -> None:
    assert score_owner_header(header) == expected


def test_detect_agent_email_column() -> None:
    headers = ["Contact", "Agent Email"]
    rows = [["Ann Lee", "jo@agency.com"], ["Bob Kim", "max@agency.com"], ["Cara Diaz", "jo@agency.com"]]
    result = detect_owner_email_column(headers, rows)
    assert result is not None
    assert result.header == "Agent Email"
    assert result.index == 1
    assert result.score >= 90
    assert result.header_score == 95
    assert result.pattern_score == 1.0


def test_content_can_promote_weak_header() -> None:
    rows = [["a@b.co", "x"], ["c@d.co", "y"]]
    result = detect_owner_email_column(["Sales Rep", "Account Manager"], rows)
    assert result is not None
    assert result.header == "Sales Rep"


def test_no_owner_column() -> None:
    rows = [["Ann", "a@b.co"], ["Bob", "c@d.co"]]
    # "Email" seul : en-tête 0, contenu 30 -> sous le seuil
    assert detect_owner_email_column(["Name", "Email"], rows) is None


def test_empty_inputs() -> None:
    assert detect_owner_email_column([], []) is None
    assert detect_owner_email_column(["Agent Email"], []) is not None


def test_first_seen_wins_ties() -> None:
    rows = [["a@b.co", "a@b.co"]]
    result = detect_owner_email_column(["Agent Email", "Agent Email"], rows)
    assert result is not None
    assert result.index == 0


def test_blank_headers_skipped() -> None:
    rows = [["a@b.co", "a@b.co"]]
    result = detect_owner_email_column(["", "Agent Email"], rows)
    assert result is not None
    assert result.index == 1


def test_min_score_override() -> None:
    rows = [["a@b.co"]]
    assert detect_owner_email_column(["Sales Rep"], rows, min_score=80) is None


def test_rows_to_matrix() -> None:
    rows = [{"a": "1", "b": None}, {"a": 2}, {}]
    assert rows_to_matrix(["a", "b"], rows) == [["1", ""], ["2", ""], ["", ""]]
