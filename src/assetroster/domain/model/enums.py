"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class CanonicalField(StrEnum):
    """Target attributes every roster format is normalized into."""

    NO = "no"
    STAFF_ID = "staff_id"
    FULL_NAME = "full_name"
    ORGANIZATION_NAME = "organization_name"
