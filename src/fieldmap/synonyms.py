"""Dictionnaire de synonymes d'en-têtes par champ cible."""

from __future__ import annotations

from collections.abc import Mapping

FIELD_SYNONYMS: dict[str, list[str]] = {
    "firstName": [
        "first",
        "fname",
        "given name",
        "forename",
        "first name",
        "given",
        "name first",
    ],
    "lastName": [
        "last",
        "lname",
        "surname",
        "family name",
        "last name",
        "family",
        "name last",
    ],
    "phone": [
        "mobile",
        "cell",
        "telephone",
        "contact number",
        "phone number",
        "mobile number",
        "cell phone",
        "phone no",
        "tel",
        "contact no",
    ],
    "email": [
        "e-mail",
        "email address",
        "mail",
        "e mail",
        "email addr",
        "electronic mail",
    ],
    "agentUid": [
        "agent",
        "assigned to",
        "owner",
        "sales rep",
        "agent email",
        "assigned agent",
        "account owner",
        "sales agent",
        "representative",
    ],
    "createdOn": [
        "created",
        "date created",
        "created date",
        "creation date",
        "date added",
        "added on",
    ],
}


def merge_synonyms(extra: Mapping[str, list[str]] | None = None) -> dict[str, list[str]]:
    """
    Retourne la table intégrée complétée par des synonymes propres au locataire.

    Les entrées intégrées restent en tête : l'ordre fixe quel synonyme
    est cité dans la raison quand plusieurs correspondent.
    """
    merged = {field_id: list(values) for field_id, values in FIELD_SYNONYMS.items()}
    for field_id, values in (extra or {}).items():
        current = merged.setdefault(field_id, [])
        for value in values:
            if value not in current:
                current.append(value)
    return merged
