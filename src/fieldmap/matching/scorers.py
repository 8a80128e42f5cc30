"""Calcul des scores d'en-tête : égalité, inclusion, synonymes, similarité bigrammes."""

from __future__ import annotations

import math

from fieldmap.normalize import normalize_header

FULL_NAME_TOKENS = ("full name", "fullname")
SINGLE_NAME_FIELDS = frozenset({"firstName", "lastName"})
FUZZY_THRESHOLD = 0.6


def bigrams(value: str) -> list[str]:
    """Sous-chaînes de 2 caractères qui se chevauchent (doublons conservés)."""
    return [value[i : i + 2] for i in range(len(value) - 1)]


def bigram_similarity(a: str, b: str) -> float:
    """
    Coefficient de Dice sur les bigrammes de deux chaînes déjà normalisées.

    L'intersection est un filtre : chaque bigramme de `a` présent dans `b`
    compte, y compris ses répétitions. Le score n'est donc pas symétrique
    quand `a` contient des bigrammes répétés.

    Returns:
        Score entre 0 et 1 (0 si l'une des chaînes a moins de 2 caractères).
    """
    bigrams_a = bigrams(a)
    bigrams_b = bigrams(b)
    if not bigrams_a or not bigrams_b:
        return 0.0
    overlap = sum(1 for bg in bigrams_a if bg in bigrams_b)
    return 2 * overlap / (len(bigrams_a) + len(bigrams_b))


def is_excluded(normalized_header: str, field_id: str) -> bool:
    """Une colonne "nom complet" ne doit jamais prendre prénom ou nom seul."""
    return field_id in SINGLE_NAME_FIELDS and any(t in normalized_header for t in FULL_NAME_TOKENS)


def synonym_score(normalized_header: str, synonyms: list[str]) -> tuple[int, str] | None:
    """
    Cherche l'en-tête dans la liste de synonymes d'un champ.

    Returns:
        (75, raison) si égalité, (65, raison) si inclusion, sinon None.
        Le premier synonyme qui correspond l'emporte.
    """
    for synonym in synonyms:
        normalized = normalize_header(synonym)
        if not normalized:
            continue
        reason = f'Synonym match: "{synonym}"'
        if normalized == normalized_header:
            return 75, reason
        if normalized in normalized_header or normalized_header in normalized:
            return 65, reason
    return None


def header_score(normalized_header: str, normalized_label: str, synonyms: list[str]) -> tuple[int, str | None]:
    """
    Score (0-100) d'un en-tête normalisé face au libellé normalisé d'un champ.

    Returns:
        (score, raison) ; (0, None) si aucune correspondance.
    """
    if not normalized_header:
        return 0, None

    if normalized_header == normalized_label:
        return 100, "Exact header match"
    if normalized_label and (normalized_label in normalized_header or normalized_header in normalized_label):
        return 80, "Similar header match"

    synonym = synonym_score(normalized_header, synonyms)
    if synonym is not None:
        return synonym

    similarity = bigram_similarity(normalized_header, normalized_label)
    if similarity > FUZZY_THRESHOLD:
        return math.floor(similarity * 60), "Similar header name"
    return 0, None
