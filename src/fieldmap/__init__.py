"""FieldMap - Suggestion de correspondances entre colonnes de tableur et champs de schéma."""

from fieldmap.config import ConfigError, ConfigFileError, FieldMapError
from fieldmap.io_excel import SheetFileError

__all__ = [
    "__version__",
    "FieldMapError",
    "ConfigError",
    "ConfigFileError",
    "SheetFileError",
]

__version__ = "0.1.0"
