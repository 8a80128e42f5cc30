"""Interface en ligne de commande FieldMap."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from fieldmap import __version__
from fieldmap.config import Config, FieldMapError
from fieldmap.io_excel import dataframe_to_samples, list_sheets, load_sheet, save_xlsx
from fieldmap.matching.mapper import FieldMapper, build_fallback_mappings
from fieldmap.matching.owner import detect_owner_email_column
from fieldmap.matching.resolver import resolve_duplicates
from fieldmap.report import build_mapping_df, build_report_df, print_report_console

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def cmd_list_sheets(filepath: str) -> int:
    """Liste les feuilles d'un fichier tableur."""
    sheets = list_sheets(filepath)
    print(f"Feuilles dans {filepath}:")
    for s in sheets:
        print(f"  - {s}")
    return 0


def cmd_suggest(
    filepath: str,
    config_path: str | None,
    *,
    sheet: str | None = None,
    header_row: int = 1,
    resolve: bool | None = None,
    as_json: bool = False,
    output_path: str | None = None,
) -> int:
    """Propose un champ cible pour chaque colonne du fichier."""
    config = Config.load(config_path) if config_path else Config()
    df = load_sheet(filepath, sheet, header_row=header_row)
    headers, rows = dataframe_to_samples(df, config.sample_rows)
    logger.info("%s: %d colonnes, %d lignes échantillonnées", filepath, len(headers), len(rows))

    if config.fields:
        mappings = FieldMapper.from_config(config).map_columns(headers, rows)
        if config.resolve_duplicates if resolve is None else resolve:
            mappings = resolve_duplicates(mappings)
    else:
        logger.warning("Catalogue de champs vide: toutes les colonnes sont des champs nouveaux")
        mappings = build_fallback_mappings(headers, rows)

    owner = None
    if config.detect_owner:
        owner = detect_owner_email_column(headers, rows, min_score=config.owner_min_score)

    if as_json:
        payload = {
            "mappings": [m.to_dict() for m in mappings],
            "owner_column": owner.to_dict() if owner else None,
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print_report_console(mappings, owner)

    if output_path:
        save_xlsx(
            output_path,
            {"MAPPING": build_mapping_df(mappings), "REPORT": build_report_df(mappings, config, owner)},
        )
        if not as_json:
            print(f"Fichier de sortie: {output_path}")

    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fieldmap",
        description="Suggestion de correspondances entre colonnes de tableur et champs de schéma",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Journalisation détaillée")

    subparsers = parser.add_subparsers(dest="command", help="Commandes")

    # list-sheets
    p_list = subparsers.add_parser("list-sheets", help="Lister les feuilles d'un tableur")
    p_list.add_argument("file", help="Fichier xlsx, xls, ods ou csv")

    # suggest
    p_suggest = subparsers.add_parser("suggest", help="Proposer les correspondances de colonnes")
    p_suggest.add_argument("file", help="Fichier xlsx, xls, ods ou csv")
    p_suggest.add_argument("--config", "-c", help="Fichier config JSON (catalogue, seuils)")
    p_suggest.add_argument("--sheet", "-s", help="Feuille à analyser (défaut: première)")
    p_suggest.add_argument("--header-row", type=int, default=1, help="Ligne des en-têtes (1-based)")
    p_suggest.add_argument(
        "--no-resolve",
        action="store_true",
        help="Ne pas dédoublonner les suggestions entre colonnes",
    )
    p_suggest.add_argument("--json", action="store_true", help="Sortie JSON")
    p_suggest.add_argument("--output", "-o", help="Fichier xlsx de rapport")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        if args.command == "list-sheets":
            return cmd_list_sheets(args.file)

        if args.command == "suggest":
            return cmd_suggest(
                args.file,
                args.config,
                sheet=args.sheet,
                header_row=args.header_row,
                resolve=False if args.no_resolve else None,
                as_json=args.json,
                output_path=args.output,
            )
    except FieldMapError as e:
        print(f"Erreur: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
