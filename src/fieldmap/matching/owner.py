"""Détection de la colonne contenant l'email de l'agent propriétaire des lignes."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from fieldmap.matching.patterns import validate_email_pattern
from fieldmap.matching.schema import OwnerColumnMatch
from fieldmap.normalize import normalize_header, safe_str, tokenize

logger = logging.getLogger(__name__)

EXACT_HEADER_MATCHES = frozenset(
    {
        "agent email",
        "agentemail",
        "agent e mail",
        "agent_email",
        "assigned agent email",
        "assigned agent",
        "assigned_to_email",
        "assigned_to_agent",
        "assigned email",
        "agent contact email",
        "agentcontactemail",
        "advisor email",
        "advisor_email",
        "representative email",
        "rep email",
        "sales agent email",
        "account owner email",
    }
)

OWNER_TOKENS = frozenset(
    {
        "agent",
        "advisor",
        "rep",
        "representative",
        "owner",
        "assignee",
        "assigned",
        "manager",
        "realtor",
        "broker",
    }
)

EMAIL_TOKENS = frozenset({"email", "mail", "e", "address"})

MINIMUM_CONFIDENCE = 45
HEADER_WEIGHT = 0.7
CONTENT_WEIGHT = 0.3


def score_owner_header(header: str) -> int:
    """Score (0-95) d'un en-tête comme colonne "email de l'agent"."""
    normalized = normalize_header(header)
    if not normalized:
        return 0
    if normalized in EXACT_HEADER_MATCHES:
        return 95

    tokens = tokenize(header)
    has_owner = any(t in OWNER_TOKENS for t in tokens)
    has_email = any(t in EMAIL_TOKENS for t in tokens)

    if has_owner and has_email:
        return 85
    if has_owner and "mail" in normalized:
        return 75
    if "assigned" in normalized and "agent" in normalized:
        return 70
    if has_owner:
        return 55
    return 0


def _column_values(rows: list[list[str]], index: int) -> list[str]:
    values = (safe_str(row[index] if index < len(row) else "").strip() for row in rows)
    return [v for v in values if v]


def detect_owner_email_column(
    headers: list[str],
    rows: list[list[str]],
    *,
    min_score: float = MINIMUM_CONFIDENCE,
) -> OwnerColumnMatch | None:
    """
    Trouve la colonne la plus probablement porteuse de l'email de l'agent.

    Score combiné = arrondi(0.7 * score d'en-tête + 0.3 * 100 * part
    d'emails valides). En dessous de `min_score` la colonne est écartée ;
    en cas d'égalité la première colonne rencontrée l'emporte.

    Returns:
        OwnerColumnMatch, ou None si aucune colonne n'atteint le seuil.
    """
    best: OwnerColumnMatch | None = None

    for index, header in enumerate(headers):
        if not isinstance(header, str) or not header.strip():
            continue

        h_score = score_owner_header(header)
        samples = _column_values(rows, index)
        p_score = validate_email_pattern(samples) if samples else 0.0
        # Arrondi au demi supérieur (pas d'arrondi bancaire)
        combined = math.floor(h_score * HEADER_WEIGHT + p_score * 100 * CONTENT_WEIGHT + 0.5)

        if combined < min_score:
            continue
        if best is None or combined > best.score:
            best = OwnerColumnMatch(
                header=header,
                index=index,
                score=combined,
                header_score=h_score,
                pattern_score=p_score,
            )

    if best is None:
        logger.debug("Aucune colonne email d'agent détectée parmi %d en-têtes", len(headers))
    else:
        logger.debug("Colonne email d'agent: %r (score=%d)", best.header, best.score)
    return best


def rows_to_matrix(headers: list[str], rows: list[Mapping[str, Any]]) -> list[list[str]]:
    """Convertit des lignes {en-tête: valeur} en matrice de chaînes alignée sur `headers`."""
    return [[safe_str(row.get(header) if row else None) for header in headers] for row in rows]
