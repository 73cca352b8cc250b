"""Domain model for asset rosters."""

from __future__ import annotations

from .asset import AssetDraft, AssetRecord, Ordinal, validate_admission
from .enums import CanonicalField

__all__ = [
    "AssetDraft",
    "AssetRecord",
    "CanonicalField",
    "Ordinal",
    "validate_admission",
]
