"""Canonical asset roster entries.

``AssetDraft`` is what parsers and callers hand to the store; ``AssetRecord`` is
what the store hands back. Only the store assigns ``modified_at``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from assetroster.domain.errors import RecordValidationError
from assetroster.domain.model.enums import CanonicalField

type Ordinal = int | float


@dataclass(frozen=True, slots=True, kw_only=True)
class AssetDraft:
    """Candidate or caller-edited roster entry, not yet persisted."""

    staff_id: str
    full_name: str
    organization_name: str = ""
    no: Ordinal | None = None

    def stamped(self, modified_at: int) -> AssetRecord:
        """Return the persisted form of this draft."""

        return AssetRecord(**asdict(self), modified_at=modified_at)


@dataclass(frozen=True, slots=True, kw_only=True)
class AssetRecord:
    """Persisted roster entry keyed by ``staff_id``."""

    staff_id: str
    full_name: str
    organization_name: str = ""
    no: Ordinal | None = None
    modified_at: int

    def to_draft(self) -> AssetDraft:
        return AssetDraft(
            staff_id=self.staff_id,
            full_name=self.full_name,
            organization_name=self.organization_name,
            no=self.no,
        )


def validate_admission(draft: AssetDraft) -> None:
    """Raise ``RecordValidationError`` unless the draft may enter the store."""

    if not draft.staff_id.strip():
        raise RecordValidationError(
            "Staff ID is required",
            staff_id=draft.staff_id,
            field=CanonicalField.STAFF_ID,
        )
    if not draft.full_name.strip():
        raise RecordValidationError(
            f"Full name is required for staff ID {draft.staff_id!r}",
            staff_id=draft.staff_id,
            field=CanonicalField.FULL_NAME,
        )
