"""Résolution des suggestions en double : un seul propriétaire par champ."""

from __future__ import annotations

import logging
from dataclasses import replace

from fieldmap.matching.schema import ColumnMapping

logger = logging.getLogger(__name__)


def resolve_duplicates(mappings: list[ColumnMapping]) -> list[ColumnMapping]:
    """
    Garde, pour chaque champ, la seule colonne qui le propose le mieux.

    Les colonnes sont groupées par champ de leur meilleure suggestion. Dans
    chaque groupe de plus d'une colonne, le gagnant est celui de plus haut
    score (puis de plus petit index). Le gagnant reçoit le champ s'il est de
    confiance `high`. Les perdants perdent leurs suggestions (conservées
    dans `conflicts`), leur sélection si elle visait ce champ, et passent en
    champ personnalisé.

    Ne modifie pas la liste d'entrée.

    Returns:
        Nouvelle liste de ColumnMapping, dans le même ordre.
    """
    groups: dict[str, list[ColumnMapping]] = {}
    for mapping in mappings:
        top = mapping.top_match
        if top is None:
            continue
        groups.setdefault(top.field_id, []).append(mapping)

    winner_by_field: dict[str, int] = {}
    for field_id, group in groups.items():
        if len(group) < 2:
            continue
        group.sort(key=lambda m: (-m.top_match.score, m.index))  # type: ignore[union-attr]
        winner_by_field[field_id] = group[0].index
        logger.debug(
            "Champ %r revendiqué par %d colonnes, gagnant: %r",
            field_id,
            len(group),
            group[0].header,
        )

    if not winner_by_field:
        return list(mappings)

    resolved: list[ColumnMapping] = []
    for mapping in mappings:
        top = mapping.top_match
        if top is None or top.field_id not in winner_by_field:
            resolved.append(mapping)
            continue

        if mapping.index == winner_by_field[top.field_id]:
            if top.confidence == "high" and mapping.selected_field != top.field_id:
                mapping = replace(mapping, selected_field=top.field_id)
            resolved.append(mapping)
            continue

        resolved.append(
            replace(
                mapping,
                selected_field=None if mapping.selected_field == top.field_id else mapping.selected_field,
                suggested_matches=[],
                conflicts=list(mapping.suggested_matches),
                is_custom_field=True,
            )
        )

    return resolved
