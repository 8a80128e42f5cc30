"""Configuration, catalogue de champs cible et chargement du fichier config JSON."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

VALID_FIELD_TYPES = frozenset({"text", "number", "phone", "email", "datetime"})


class FieldMapError(Exception):
    """Exception de base pour FieldMap."""


class ConfigError(FieldMapError, ValueError):
    """Erreur de validation de la configuration."""


class ConfigFileError(FieldMapError):
    """Erreur de chargement du fichier de configuration (fichier absent, JSON invalide)."""


@dataclass(frozen=True)
class TargetField:
    """Champ du schéma cible sur lequel une colonne peut être rattachée."""

    id: str
    label: str
    type: str = "text"  # text, number, phone, email, datetime
    core: bool = False

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TargetField:
        raw_id = d.get("id")
        field_id = raw_id.strip() if isinstance(raw_id, str) else ""
        if not field_id:
            raise ConfigError(f"id de champ requis (got {raw_id!r})")

        raw_label = d.get("label")
        label = raw_label.strip() if isinstance(raw_label, str) and raw_label.strip() else field_id

        raw_type = d.get("type")
        field_type = raw_type.strip().lower() if isinstance(raw_type, str) else ""
        if field_type not in VALID_FIELD_TYPES:
            logger.warning("Type de champ inconnu %r pour %r, repli sur 'text'", raw_type, field_id)
            field_type = "text"

        return cls(id=field_id, label=label, type=field_type, core=bool(d.get("core", False)))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "type": self.type, "core": self.core}


# Catalogue des champs de base, utilisé quand la configuration n'en fournit pas
DEFAULT_FIELDS: tuple[TargetField, ...] = (
    TargetField("firstName", "First Name", "text", True),
    TargetField("lastName", "Last Name", "text", True),
    TargetField("phone", "Phone", "phone", True),
    TargetField("email", "Email", "email", True),
    TargetField("createdOn", "Created On", "datetime", True),
)


def parse_fields(items: Any) -> list[TargetField]:
    """
    Construit un catalogue de champs depuis une liste JSON.

    Raises:
        ConfigError: Si la liste est mal formée ou si un id apparaît deux fois.
    """
    if not isinstance(items, list):
        raise ConfigError(f"fields doit être une liste (got {type(items).__name__})")

    fields: list[TargetField] = []
    seen: set[str] = set()
    for item in items:
        if not isinstance(item, dict):
            raise ConfigError(f"Chaque champ doit être un objet JSON (got {item!r})")
        target = TargetField.from_dict(item)
        if target.id in seen:
            raise ConfigError(f"id de champ dupliqué: {target.id!r}")
        seen.add(target.id)
        fields.append(target)
    return fields


@dataclass
class Config:
    """Configuration principale de FieldMap."""

    fields: list[TargetField] = field(default_factory=lambda: list(DEFAULT_FIELDS))
    synonyms: dict[str, list[str]] = field(default_factory=dict)  # field_id -> en-têtes alternatifs

    sample_rows: int = 100
    top_k: int = 3
    custom_field_threshold: float = 40.0
    resolve_duplicates: bool = True
    detect_owner: bool = True
    owner_min_score: float = 45.0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Config:
        fields = parse_fields(d["fields"]) if "fields" in d else list(DEFAULT_FIELDS)

        synonyms = d.get("synonyms", {})
        if not isinstance(synonyms, dict):
            raise ConfigError("synonyms doit être un objet {field_id: [en-têtes]}")
        for field_id, values in synonyms.items():
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise ConfigError(f"synonyms[{field_id!r}] doit être une liste de chaînes")

        sample_rows = int(d.get("sample_rows", 100))
        top_k = int(d.get("top_k", 3))
        custom_field_threshold = float(d.get("custom_field_threshold", 40.0))
        owner_min_score = float(d.get("owner_min_score", 45.0))

        if sample_rows < 1:
            raise ConfigError(f"sample_rows doit être >= 1 (got {sample_rows})")
        if top_k < 1:
            raise ConfigError(f"top_k doit être >= 1 (got {top_k})")
        if not 0 <= custom_field_threshold <= 100:
            raise ConfigError(
                f"custom_field_threshold doit être entre 0 et 100 (got {custom_field_threshold})"
            )
        if not 0 <= owner_min_score <= 100:
            raise ConfigError(f"owner_min_score doit être entre 0 et 100 (got {owner_min_score})")

        return cls(
            fields=fields,
            synonyms={k: list(v) for k, v in synonyms.items()},
            sample_rows=sample_rows,
            top_k=top_k,
            custom_field_threshold=custom_field_threshold,
            resolve_duplicates=bool(d.get("resolve_duplicates", True)),
            detect_owner=bool(d.get("detect_owner", True)),
            owner_min_score=owner_min_score,
        )

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """
        Charge la configuration depuis un fichier JSON.

        Raises:
            ConfigFileError: Si le fichier est absent ou le JSON invalide.
            ConfigError: Si la configuration est invalide.
        """
        path = Path(path).resolve()
        if not path.exists():
            raise ConfigFileError(f"Fichier de configuration introuvable: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                d = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigFileError(f"JSON invalide dans {path}: {e}") from e
        except OSError as e:
            raise ConfigFileError(f"Impossible de lire {path}: {e}") from e

        if not isinstance(d, dict):
            raise ConfigFileError(f"Fichier de configuration invalide: {path} doit contenir un objet JSON")

        return cls.from_dict(d)
