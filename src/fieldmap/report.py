"""Génération du rapport de correspondance (onglets MAPPING et REPORT)."""

from __future__ import annotations

from datetime import datetime

import pandas as pd

from fieldmap import __version__
from fieldmap.config import Config
from fieldmap.matching.schema import ColumnMapping, OwnerColumnMatch


def build_mapping_df(mappings: list[ColumnMapping]) -> pd.DataFrame:
    """Une ligne par colonne : sélection, meilleure suggestion, alternatives, aperçu."""
    rows = []
    for m in mappings:
        top = m.top_match
        rows.append(
            {
                "column": m.header,
                "index": m.index,
                "selected_field": m.selected_field or "",
                "is_custom_field": m.is_custom_field,
                "top_field": top.field_id if top else "",
                "top_score": top.score if top else 0,
                "confidence": top.confidence if top else "",
                "reason": top.reason if top else "",
                "alternatives": ", ".join(f"{s.field_id} ({s.score})" for s in m.suggested_matches[1:]),
                "conflicts": ", ".join(f"{c.field_id} ({c.score})" for c in m.conflicts),
                "samples": " | ".join(m.sample_data),
            }
        )
    return pd.DataFrame(
        rows,
        columns=[
            "column",
            "index",
            "selected_field",
            "is_custom_field",
            "top_field",
            "top_score",
            "confidence",
            "reason",
            "alternatives",
            "conflicts",
            "samples",
        ],
    )


def _counts(mappings: list[ColumnMapping]) -> dict[str, int]:
    return {
        "nb_columns": len(mappings),
        "nb_selected": sum(1 for m in mappings if m.selected_field),
        "nb_custom": sum(1 for m in mappings if m.is_custom_field),
        "nb_high": sum(1 for m in mappings if m.top_match and m.top_match.confidence == "high"),
        "nb_medium": sum(1 for m in mappings if m.top_match and m.top_match.confidence == "medium"),
        "nb_low": sum(1 for m in mappings if m.top_match and m.top_match.confidence == "low"),
        "nb_conflicts": sum(1 for m in mappings if m.conflicts),
    }


def build_report_df(
    mappings: list[ColumnMapping],
    config: Config,
    owner: OwnerColumnMatch | None = None,
) -> pd.DataFrame:
    """
    Construit le DataFrame pour l'onglet REPORT.

    Contient : compteurs par statut, colonne agent détectée, paramètres,
    catalogue, horodatage, version.
    """
    rows: list[tuple[str, object]] = [(k, v) for k, v in _counts(mappings).items()]
    rows.extend(
        [
            ("owner_column", owner.header if owner else ""),
            ("owner_score", owner.score if owner else ""),
            ("", ""),
            ("Parameters", ""),
            ("sample_rows", config.sample_rows),
            ("top_k", config.top_k),
            ("custom_field_threshold", config.custom_field_threshold),
            ("resolve_duplicates", config.resolve_duplicates),
            ("owner_min_score", config.owner_min_score),
            ("", ""),
            ("Fields", ""),
        ]
    )
    for f in config.fields:
        rows.append((f.id, f"{f.label} ({f.type}{', core' if f.core else ''})"))
    rows.extend(
        [
            ("", ""),
            ("timestamp", datetime.now().isoformat()),
            ("version", __version__),
        ]
    )
    return pd.DataFrame(rows, columns=["Key", "Value"])


def print_report_console(mappings: list[ColumnMapping], owner: OwnerColumnMatch | None = None) -> None:
    """Affiche les correspondances et un résumé en console."""
    print("\n=== FieldMap Report ===")
    for m in mappings:
        top = m.top_match
        if top is None:
            suggestion = "(aucune suggestion)"
        else:
            suggestion = f"{top.field_id} score={top.score} [{top.confidence}] {top.reason}"
        marker = "*" if m.selected_field else " "
        custom = " (nouveau champ)" if m.is_custom_field else ""
        print(f" {marker} [{m.index}] {m.header!r} -> {suggestion}{custom}")

    c = _counts(mappings)
    print("")
    print(f"  Colonnes:         {c['nb_columns']}")
    print(f"  Auto-affectées:   {c['nb_selected']}")
    print(f"  Champs nouveaux:  {c['nb_custom']}")
    print(f"  Conflits:         {c['nb_conflicts']}")
    if owner is not None:
        print(f"  Colonne agent:    {owner.header!r} (score={owner.score})")
    else:
        print("  Colonne agent:    aucune")
    print(f"  Version:          {__version__}")
    print("=======================\n")
