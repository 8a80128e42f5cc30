"""I/O tableurs : lecture des en-têtes et échantillons (Excel, ODS, CSV), export xlsx."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

import pandas as pd

from fieldmap.config import FieldMapError
from fieldmap.normalize import safe_str

logger = logging.getLogger(__name__)

SUPPORTED_INPUT_EXTENSIONS = (".xlsx", ".xls", ".ods", ".csv")
CSV_DELIMITERS = [",", ";", "\t", "|"]


class SheetFileError(FieldMapError):
    """Erreur de chargement d'un fichier (fichier absent, feuille inexistante, CSV illisible)."""


def _get_engine(path: Path) -> str | None:
    """Retourne le moteur pandas selon l'extension, ou None pour auto."""
    suffix = path.suffix.lower()
    if suffix == ".xlsx":
        return "openpyxl"
    if suffix == ".xls":
        return "xlrd"
    if suffix in (".ods", ".odt"):
        return "odf"
    return None


def _is_csv(path: Path) -> bool:
    return path.suffix.lower() == ".csv"


def _detect_csv_delimiter(path: Path, encoding: str, *, skip_rows: int = 0) -> str | None:
    try:
        with path.open("r", encoding=encoding, errors="replace") as f:
            for _ in range(skip_rows):
                if f.readline() == "":
                    return None
            sample_lines: list[str] = []
            for line in f:
                if line.strip() == "":
                    continue
                sample_lines.append(line)
                if len(sample_lines) >= 5:
                    break
    except OSError:
        return None
    if not sample_lines:
        return None
    sample = "".join(sample_lines)
    try:
        return csv.Sniffer().sniff(sample, delimiters=CSV_DELIMITERS).delimiter
    except csv.Error:
        first = sample_lines[0]
        counts = {d: first.count(d) for d in CSV_DELIMITERS}
        best = max(counts, key=lambda d: counts[d])
        return best if counts[best] > 0 else None


def list_sheets(filepath: str | Path) -> list[str]:
    """
    Liste les noms des feuilles d'un fichier tableur.

    Raises:
        SheetFileError: Si le fichier est absent ou illisible.
    """
    path = Path(filepath)
    if not path.exists():
        raise SheetFileError(f"Fichier introuvable: {path}")
    if _is_csv(path):
        return ["(données)"]
    return [str(s) for s in _open_workbook(path).sheet_names]


def _open_workbook(path: Path) -> pd.ExcelFile:
    engine = _get_engine(path)
    try:
        return pd.ExcelFile(path, engine=engine) if engine else pd.ExcelFile(path)
    except ImportError as e:
        ext = path.suffix.lower()
        if ext == ".xls":
            raise SheetFileError("Format .xls requis: pip install fieldmap[xls]") from e
        if ext in (".ods", ".odt"):
            raise SheetFileError("Format ODS requis: pip install fieldmap[ods]") from e
        raise SheetFileError(f"Impossible de lire {path}: {e}") from e
    except Exception as e:
        raise SheetFileError(f"Impossible de lire le fichier {path}: {e}") from e


def _read_csv(path: Path, header_idx: int) -> pd.DataFrame:
    skiprows = range(header_idx) if header_idx > 0 else None
    for encoding in ("utf-8", "latin-1"):
        delimiter = _detect_csv_delimiter(path, encoding, skip_rows=header_idx) or ","
        try:
            return pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                encoding=encoding,
                skiprows=skiprows,
                sep=delimiter,
            )
        except UnicodeDecodeError:
            logger.debug("%s illisible en %s, nouvel essai", path, encoding)
            continue
        except pd.errors.ParserError:
            # Lignes de longueur incohérente : moteur python, lignes invalides ignorées
            try:
                return pd.read_csv(
                    path,
                    dtype=str,
                    keep_default_na=False,
                    encoding=encoding,
                    skiprows=skiprows,
                    sep=delimiter,
                    engine="python",
                    on_bad_lines="warn",
                )
            except (pd.errors.ParserError, ValueError) as e:
                raise SheetFileError(
                    f"Erreur CSV {path}: {e}. Vérifiez la ligne d'en-tête et le séparateur."
                ) from e
        except (pd.errors.EmptyDataError, OSError, ValueError) as e:
            raise SheetFileError(f"Erreur CSV {path}: {e}") from e
    raise SheetFileError(f"Erreur CSV {path}: encodage non reconnu")


def load_sheet(
    filepath: str | Path,
    sheet_name: str | None = None,
    *,
    header_row: int = 1,
) -> pd.DataFrame:
    """
    Charge une feuille dans un DataFrame en préservant le texte.

    Toutes les colonnes sont lues en `str` pour que l'analyse de contenu
    voie les valeurs telles qu'elles figurent dans le fichier.

    Args:
        filepath: Chemin vers le fichier (.xlsx, .xls, .ods, .csv).
        sheet_name: Nom de la feuille (None = première). Ignoré pour CSV.
        header_row: Numéro de ligne (1-based) contenant les en-têtes.

    Raises:
        SheetFileError: Si le fichier est absent, illisible ou si la feuille n'existe pas.
    """
    path = Path(filepath)
    if not path.exists():
        raise SheetFileError(f"Fichier introuvable: {path}")

    header_idx = max(header_row - 1, 0)
    if _is_csv(path):
        return _read_csv(path, header_idx)

    xl = _open_workbook(path)
    if sheet_name is None:
        sheet_name = str(xl.sheet_names[0])
    elif sheet_name not in xl.sheet_names:
        sheets = [str(s) for s in xl.sheet_names]
        raise SheetFileError(
            f"Feuille '{sheet_name}' introuvable dans {path}. Feuilles: {', '.join(sheets)}"
        )

    try:
        return pd.read_excel(xl, sheet_name=sheet_name, dtype=str, header=header_idx)
    except Exception as e:
        raise SheetFileError(f"Erreur feuille '{sheet_name}' dans {path}: {e}") from e


def dataframe_to_samples(df: pd.DataFrame, limit: int = 100) -> tuple[list[str], list[list[str]]]:
    """
    Extrait les en-têtes et les `limit` premières lignes sous forme de chaînes.

    Les cellules vides ou NaN deviennent "". Les colonnes sans nom
    ("Unnamed: 3") gardent le nom attribué par pandas.

    Returns:
        (en-têtes, lignes)
    """
    headers = [safe_str(c) for c in df.columns]
    rows = [[safe_str(v) for v in row] for row in df.head(limit).itertuples(index=False, name=None)]
    return headers, rows


def save_xlsx(filepath: str | Path, dataframes: dict[str, pd.DataFrame]) -> None:
    """
    Sauvegarde plusieurs DataFrames dans un fichier xlsx (une feuille par DataFrame).

    Args:
        filepath: Chemin de sortie.
        dataframes: Dict {nom_feuille: DataFrame}.
    """
    with pd.ExcelWriter(filepath, engine="openpyxl") as writer:
        for sheet_name, df in dataframes.items():
            # Excel limite les noms de feuille à 31 caractères
            safe_name = str(sheet_name)[:31]
            df.to_excel(writer, sheet_name=safe_name, index=False)
