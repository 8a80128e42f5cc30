"""Tests des classifieurs de contenu."""

import warnings

from dateutil.parser import UnknownTimezoneWarning
from freezegun import freeze_time

from fieldmap.matching.patterns import (
    is_date,
    pattern_reason,
    pattern_score,
    validate_date_pattern,
    validate_email_pattern,
    validate_number_pattern,
    validate_phone_pattern,
)


def test_email_all_valid() -> None:
    assert validate_email_pattern(["agent@example.com"] * 100) == 1.0


def test_email_partial() -> None:
    assert validate_email_pattern(["a@b.co", "not an email"]) == 0.5
    assert validate_email_pattern(["a b@c.com", "a@@b.com"]) == 0.0


def test_email_trims_values() -> None:
    assert validate_email_pattern(["  a@b.co  "]) == 1.0


def test_skip_mostly_empty_column() -> None:
    """Colonne vide à 95 % : score 0 quel que soit le contenu."""
    values = ["a@b.co"] * 5 + [""] * 95
    assert validate_email_pattern(values) == 0.0


def test_skip_exactly_ten_percent() -> None:
    values = ["a@b.co"] * 10 + ["  "] * 90
    assert validate_email_pattern(values) == 0.0


def test_blank_values_ignored_above_threshold() -> None:
    values = ["a@b.co"] * 50 + [""] * 50
    assert validate_email_pattern(values) == 1.0


def test_empty_column() -> None:
    assert validate_email_pattern([]) == 0.0
    assert validate_phone_pattern([]) == 0.0
    assert validate_date_pattern([]) == 0.0
    assert validate_number_pattern([]) == 0.0


def test_phone_formats() -> None:
    values = ["555-123-4567", "(555) 123-4567", "555.123.4567", "5551234567", "+1-555-123-4567"]
    assert validate_phone_pattern(values) == 1.0


def test_phone_requires_ten_digits() -> None:
    assert validate_phone_pattern(["5551234567", "555-1234"]) == 0.5
    assert validate_phone_pattern(["hello", "call me"]) == 0.0


def test_date_pattern() -> None:
    assert validate_date_pattern(["2023-01-15", "01/15/2023", "March 3, 2021"]) == 1.0
    assert validate_date_pattern(["2023-01-15", "hello world"]) == 0.5


def test_date_pattern_independent_of_current_day() -> None:
    """Un jour seul ("31") reste une date, quel que soit le mois courant."""
    days = ["31", "30", "29", "15"]
    with freeze_time("2026-01-10"):
        january = validate_date_pattern(days)
    with freeze_time("2026-02-10"):
        february = validate_date_pattern(days)
    assert january == february == 1.0


def test_date_unknown_timezone_is_silent() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", UnknownTimezoneWarning)
        assert is_date("10:00 PST")


def test_number_pattern() -> None:
    assert validate_number_pattern(["1,234.56", "42", "-3.5", "1e3"]) == 1.0
    assert validate_number_pattern(["abc", "12"]) == 0.5


def test_number_pattern_leading_prefix() -> None:
    """Seul le préfixe numérique compte : "12kg" est un nombre."""
    assert validate_number_pattern(["12kg", "$5"]) == 0.5


def test_pattern_score_text_neutral() -> None:
    assert pattern_score(["anything"], "text") == 0.5
    assert pattern_score([], "text") == 0.5


def test_pattern_score_first_hundred_values_only() -> None:
    values = ["x"] * 100 + ["a@b.co"] * 50
    assert pattern_score(values, "email") == 0.0


def test_pattern_reason() -> None:
    assert pattern_reason("email", 0.92) == "Strong email pattern (92% match)"
    assert pattern_reason("datetime", 1.0) == "Strong date pattern (100% match)"
    assert pattern_reason("number", 0.85) == "Strong numeric pattern (85% match)"
    assert pattern_reason("text", 1.0) is None
    assert pattern_reason("email", 0.0) is None
