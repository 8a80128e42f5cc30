"""Moteur de correspondance : score des colonnes, suggestions et auto-affectation."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from fieldmap.config import Config, TargetField
from fieldmap.matching.patterns import pattern_reason, pattern_score
from fieldmap.matching.schema import (
    ColumnMapping,
    FieldMatch,
    SourceColumn,
    collect_column_samples,
    confidence_tier,
)
from fieldmap.matching.scorers import header_score, is_excluded
from fieldmap.normalize import normalize_header
from fieldmap.synonyms import merge_synonyms

logger = logging.getLogger(__name__)

STRONG_PATTERN_THRESHOLD = 0.8
WEAK_PATTERN_THRESHOLD = 0.3
PATTERN_ONLY_SCORE = 50
HEADER_SUPPORT_SCORE = 40
PATTERN_BOOST = 20
WEAK_PATTERN_PENALTY = 0.6


class FieldMapper:
    """Suggère, pour chaque colonne, les champs cible les plus probables."""

    def __init__(
        self,
        fields: list[TargetField],
        *,
        synonyms: Mapping[str, list[str]] | None = None,
        top_k: int = 3,
        custom_field_threshold: float = 40.0,
        sample_limit: int = 100,
    ) -> None:
        self.fields = list(fields)
        self.synonyms = merge_synonyms(synonyms)
        self.top_k = top_k
        self.custom_field_threshold = custom_field_threshold
        self.sample_limit = sample_limit

    @classmethod
    def from_config(cls, config: Config) -> FieldMapper:
        return cls(
            config.fields,
            synonyms=config.synonyms,
            top_k=config.top_k,
            custom_field_threshold=config.custom_field_threshold,
            sample_limit=config.sample_rows,
        )

    def map_columns(self, headers: list[str], sample_rows: list[list[str]]) -> list[ColumnMapping]:
        """
        Analyse toutes les colonnes et auto-affecte les correspondances sûres.

        Une colonne reçoit `selected_field` seulement si sa meilleure
        suggestion est de confiance `high` et que le champ n'a pas déjà été
        pris par une colonne précédente (passe unique, de gauche à droite).

        Returns:
            Liste de ColumnMapping, une par en-tête, dans le même ordre.
        """
        claimed: set[str] = set()
        mappings: list[ColumnMapping] = []

        for index, header in enumerate(headers):
            column = SourceColumn.from_rows(header, index, sample_rows, self.sample_limit)
            matches = self.find_matches(column)
            best = matches[0] if matches else None

            selected: str | None = None
            if best is not None and best.confidence == "high" and best.field_id not in claimed:
                selected = best.field_id
                claimed.add(best.field_id)

            mappings.append(
                ColumnMapping(
                    header=header,
                    index=index,
                    suggested_matches=matches[: self.top_k],
                    selected_field=selected,
                    is_custom_field=self.is_custom(matches),
                    sample_data=column.preview,
                )
            )

        logger.debug(
            "%d colonnes analysées, %d champs auto-affectés: %s",
            len(mappings),
            len(claimed),
            sorted(claimed),
        )
        return mappings

    def is_custom(self, matches: list[FieldMatch]) -> bool:
        """Aucun champ du catalogue assez proche : à traiter comme nouveau champ."""
        return not matches or matches[0].score < self.custom_field_threshold

    def find_matches(self, column: SourceColumn) -> list[FieldMatch]:
        """Toutes les correspondances de la colonne, triées par score décroissant."""
        matches: list[FieldMatch] = []
        for target in self.fields:
            match = self.score_field(column, target)
            if match is not None:
                matches.append(match)
        matches.sort(key=lambda m: m.score, reverse=True)
        return matches

    def score_field(self, column: SourceColumn, target: TargetField) -> FieldMatch | None:
        """
        Calcule la correspondance entre une colonne et un champ.

        Combine le score d'en-tête (égalité, inclusion, synonyme, similarité)
        avec le score de contenu du type du champ : un contenu fort renforce
        un en-tête plausible ou suffit seul à proposer le champ à 50 ; un
        contenu faible mais non nul pénalise un bon en-tête.

        Returns:
            FieldMatch, ou None si le score final est nul.
        """
        normalized_header = normalize_header(column.header)
        if is_excluded(normalized_header, target.id):
            return None
        if not normalized_header:
            return None

        score, reason = header_score(
            normalized_header,
            normalize_header(target.label),
            self.synonyms.get(target.id, []),
        )

        content = pattern_score(column.values, target.type)
        if content > STRONG_PATTERN_THRESHOLD:
            if score >= HEADER_SUPPORT_SCORE:
                score = min(100, score + PATTERN_BOOST)
            else:
                score = PATTERN_ONLY_SCORE
                reason = pattern_reason(target.type, content)
        elif score >= PATTERN_ONLY_SCORE and 0 < content < WEAK_PATTERN_THRESHOLD:
            score = score * WEAK_PATTERN_PENALTY

        final = math.floor(score)
        if final <= 0:
            return None

        return FieldMatch(
            field_id=target.id,
            field_label=target.label,
            confidence=confidence_tier(final),
            score=final,
            reason=reason or pattern_reason(target.type, content) or "Possible match",
        )


def build_fallback_mappings(headers: list[str], rows: list[list[str]]) -> list[ColumnMapping]:
    """Correspondances vides (toutes en champ personnalisé) quand l'analyse est impossible."""
    return [
        ColumnMapping(
            header=header,
            index=index,
            suggested_matches=[],
            selected_field=None,
            is_custom_field=True,
            sample_data=collect_column_samples(rows, index),
        )
        for index, header in enumerate(headers)
    ]


def select_field(mapping: ColumnMapping, field_id: str | None, *, custom_field_threshold: float = 40.0) -> None:
    """
    Applique un choix manuel du relecteur sur une colonne.

    field_id None = retirer la sélection ; `is_custom_field` est alors
    recalculé depuis les suggestions.
    """
    if field_id is None:
        mapping.selected_field = None
        top = mapping.top_match
        mapping.is_custom_field = top is None or top.score < custom_field_threshold
        return
    mapping.selected_field = field_id
    mapping.is_custom_field = False
