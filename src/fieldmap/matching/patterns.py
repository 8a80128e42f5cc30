"""Classification du contenu d'une colonne (email, téléphone, date, nombre)."""

from __future__ import annotations

import math
import re
import warnings
from collections.abc import Callable, Sequence
from datetime import datetime

from dateutil import parser as dateparser
from dateutil.parser import UnknownTimezoneWarning

MIN_FILLED_RATIO = 0.1
SAMPLE_LIMIT = 100
NEUTRAL_PATTERN_SCORE = 0.5
# Année bissextile, janvier à 31 jours : tout jour 1-31 est accepté
DATE_DEFAULT = datetime(2000, 1, 1)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(
    r"^[+]?[(]?[0-9]{1,4}[)]?[-\s.]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,4}[-\s.]?[0-9]{1,9}$"
)
_PHONE_SEPARATORS_RE = re.compile(r"[\s\-().]")
# Préfixe numérique, à la manière d'un parseFloat : "12kg" → 12
_LEADING_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _non_empty(values: Sequence[str]) -> list[str]:
    return [v for v in values if v and v.strip()]


def _should_skip(non_empty_count: int, total_count: int) -> bool:
    """Colonne vide ou vide à >= 90 % : pas assez de données pour conclure."""
    return total_count == 0 or non_empty_count / total_count <= MIN_FILLED_RATIO


def _ratio(values: Sequence[str], predicate: Callable[[str], bool]) -> float:
    non_empty = _non_empty(values)
    if _should_skip(len(non_empty), len(values)):
        return 0.0
    matches = sum(1 for v in non_empty if predicate(v))
    return matches / len(non_empty)


def is_email(value: str) -> bool:
    return EMAIL_RE.match(value.strip()) is not None


def is_phone(value: str) -> bool:
    # Le nombre de chiffres compte le "+" éventuel, comme la forme nettoyée
    cleaned = _PHONE_SEPARATORS_RE.sub("", value)
    return PHONE_RE.match(value.strip()) is not None and len(cleaned) >= 10


def is_date(value: str) -> bool:
    # Date de référence fixe : les parties absentes ("31") ne dépendent pas du jour courant
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UnknownTimezoneWarning)
        try:
            dateparser.parse(value.strip(), default=DATE_DEFAULT)
        except (ValueError, OverflowError):
            return False
    return True


def is_number(value: str) -> bool:
    m = _LEADING_NUMBER_RE.match(value.replace(",", ""))
    if m is None:
        return False
    return math.isfinite(float(m.group(0)))


def validate_email_pattern(values: Sequence[str]) -> float:
    """
    Part des valeurs non vides ayant la forme `local@domaine.tld`.

    Returns:
        Score entre 0 et 1 (0 si la colonne est vide à >= 90 %).
    """
    return _ratio(values, is_email)


def validate_phone_pattern(values: Sequence[str]) -> float:
    """
    Part des valeurs non vides ressemblant à un numéro de téléphone.

    Formats acceptés : 555-123-4567, (555) 123-4567, 555.123.4567,
    5551234567, +1-555-123-4567. Au moins 10 caractères hors séparateurs.
    """
    return _ratio(values, is_phone)


def validate_date_pattern(values: Sequence[str]) -> float:
    """Part des valeurs non vides interprétables comme une date."""
    return _ratio(values, is_date)


def validate_number_pattern(values: Sequence[str]) -> float:
    """Part des valeurs non vides commençant par un nombre fini (virgules de milliers ignorées)."""
    return _ratio(values, is_number)


PATTERN_VALIDATORS: dict[str, Callable[[Sequence[str]], float]] = {
    "email": validate_email_pattern,
    "phone": validate_phone_pattern,
    "datetime": validate_date_pattern,
    "number": validate_number_pattern,
}


def pattern_score(values: Sequence[str], field_type: str) -> float:
    """
    Score de contenu d'une colonne pour un type de champ.

    Seules les SAMPLE_LIMIT premières valeurs sont examinées. Le type
    `text` n'a pas de classifieur : score neutre 0.5.
    """
    validator = PATTERN_VALIDATORS.get(field_type)
    if validator is None:
        return NEUTRAL_PATTERN_SCORE
    return validator(list(values[:SAMPLE_LIMIT]))


def pattern_reason(field_type: str, score: float) -> str | None:
    """Raison lisible pour un score de contenu fort, ou None."""
    if score <= 0:
        return None
    percent = math.floor(score * 100)
    labels = {
        "email": "email",
        "phone": "phone",
        "datetime": "date",
        "number": "numeric",
    }
    label = labels.get(field_type)
    if label is None:
        return None
    return f"Strong {label} pattern ({percent}% match)"
