"""Module de matching colonnes → champs."""

from fieldmap.matching.mapper import FieldMapper, build_fallback_mappings, select_field
from fieldmap.matching.owner import detect_owner_email_column, rows_to_matrix
from fieldmap.matching.resolver import resolve_duplicates
from fieldmap.matching.schema import ColumnMapping, FieldMatch, OwnerColumnMatch, SourceColumn

__all__ = [
    "FieldMapper",
    "ColumnMapping",
    "FieldMatch",
    "OwnerColumnMatch",
    "SourceColumn",
    "build_fallback_mappings",
    "detect_owner_email_column",
    "resolve_duplicates",
    "rows_to_matrix",
    "select_field",
]
