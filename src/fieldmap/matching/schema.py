"""Schémas et types pour le matching colonnes → champs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fieldmap.normalize import safe_str

HIGH_CONFIDENCE_THRESHOLD = 75
MEDIUM_CONFIDENCE_THRESHOLD = 50


def confidence_tier(score: int) -> str:
    """Niveau de confiance (high, medium, low) d'un score entier 0-100."""
    if score >= HIGH_CONFIDENCE_THRESHOLD:
        return "high"
    if score >= MEDIUM_CONFIDENCE_THRESHOLD:
        return "medium"
    return "low"


def collect_column_samples(rows: list[list[str]], index: int, limit: int = 5) -> list[str]:
    """Valeurs distinctes non vides (trim) d'une colonne, dans l'ordre des lignes."""
    samples: list[str] = []
    for row in rows:
        value = safe_str(row[index] if index < len(row) else "").strip()
        if not value or value in samples:
            continue
        samples.append(value)
        if len(samples) >= limit:
            break
    return samples


@dataclass
class SourceColumn:
    """Une colonne du fichier importé : en-tête, position et échantillons."""

    header: str
    index: int
    values: list[str]  # jusqu'à sample_limit valeurs, vides comprises
    preview: list[str]  # <= 5 valeurs pour affichage

    @classmethod
    def from_rows(
        cls,
        header: str,
        index: int,
        rows: list[list[str]],
        sample_limit: int = 100,
    ) -> SourceColumn:
        values = [safe_str(row[index]) if index < len(row) else "" for row in rows[:sample_limit]]
        return cls(
            header=header,
            index=index,
            values=values,
            preview=collect_column_samples(rows, index),
        )


@dataclass
class FieldMatch:
    """Correspondance candidate entre une colonne et un champ cible."""

    field_id: str
    field_label: str
    confidence: str  # high, medium, low
    score: int
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "field_id": self.field_id,
            "field_label": self.field_label,
            "confidence": self.confidence,
            "score": self.score,
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        return f"FieldMatch({self.field_id!r}, score={self.score}, {self.confidence})"


@dataclass
class ColumnMapping:
    """Résultat de l'analyse d'une colonne."""

    header: str
    index: int
    suggested_matches: list[FieldMatch]
    selected_field: str | None = None
    is_custom_field: bool = False
    sample_data: list[str] = field(default_factory=list)
    # Suggestions retirées par resolve_duplicates (colonne perdante)
    conflicts: list[FieldMatch] = field(default_factory=list)

    @property
    def top_match(self) -> FieldMatch | None:
        return self.suggested_matches[0] if self.suggested_matches else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "header": self.header,
            "index": self.index,
            "selected_field": self.selected_field,
            "is_custom_field": self.is_custom_field,
            "suggested_matches": [m.to_dict() for m in self.suggested_matches],
            "conflicts": [m.to_dict() for m in self.conflicts],
            "sample_data": list(self.sample_data),
        }


@dataclass
class OwnerColumnMatch:
    """Colonne retenue comme email du propriétaire (agent) des lignes."""

    header: str
    index: int
    score: int
    header_score: int
    pattern_score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "header": self.header,
            "index": self.index,
            "score": self.score,
            "header_score": self.header_score,
            "pattern_score": self.pattern_score,
        }
