"""Normalisation des en-têtes et libellés."""

from __future__ import annotations

import math
import re
import unicodedata
from typing import Any

_SEPARATORS_RE = re.compile(r"[_\-\s]+")
_NON_WORD_RE = re.compile(r"[^\w\s]")
_SPACES_RE = re.compile(r"\s+")
_TOKEN_SPLIT_RE = re.compile(r"[^a-z0-9]+")


def normalize_header(s: str | None) -> str:
    """
    Normalise un en-tête, un libellé ou un synonyme pour comparaison.

    NFKC, minuscules, suites de `_`, `-` et espaces → un espace, suppression
    de toute ponctuation restante, puis trim. Idempotente.

    Args:
        s: Texte brut (None accepté).

    Returns:
        Chaîne normalisée (éventuellement vide).
    """
    if not s:
        return ""
    text = unicodedata.normalize("NFKC", str(s)).lower().strip()
    text = _SEPARATORS_RE.sub(" ", text)
    text = _NON_WORD_RE.sub("", text)
    # La suppression de ponctuation peut laisser des espaces doubles ("a . b")
    text = _SPACES_RE.sub(" ", text)
    return text.strip()


def tokenize(header: str) -> list[str]:
    """Découpe un en-tête en jetons alphanumériques ASCII minuscules."""
    return [token for token in _TOKEN_SPLIT_RE.split(header.lower()) if token]


def safe_str(val: Any) -> str:
    """Convertit une valeur de cellule en chaîne (None / NaN / infini → "")."""
    if val is None or (isinstance(val, float) and not math.isfinite(val)):
        return ""
    return str(val)
