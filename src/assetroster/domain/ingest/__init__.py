"""Header resolution and row normalization for roster imports."""

from __future__ import annotations

from .headers import DEFAULT_FIELD_ALIASES, HeaderResolver, normalize_header
from .normalization import (
    NormalizedRoster,
    NormalizedRow,
    clean_value,
    coerce_ordinal,
    normalize_row,
    normalize_rows,
)

__all__ = [
    "DEFAULT_FIELD_ALIASES",
    "HeaderResolver",
    "NormalizedRoster",
    "NormalizedRow",
    "clean_value",
    "coerce_ordinal",
    "normalize_header",
    "normalize_row",
    "normalize_rows",
]
