"""Reconcile freshly parsed roster rows into the asset store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from assetroster.domain.errors import NoValidRowsError, RecordValidationError
from assetroster.domain.ingest import normalize_rows
from assetroster.domain.model import validate_admission

if TYPE_CHECKING:
    from collections.abc import Iterable

    from assetroster.domain.ingest import HeaderResolver
    from assetroster.domain.model import AssetDraft, AssetRecord
    from assetroster.domain.ports import RawRow
    from assetroster.domain.store import AssetStore

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RejectedRow:
    """A candidate the store refused to admit."""

    row_number: int
    draft: AssetDraft
    reason: str


@dataclass(slots=True)
class ImportRosterResult:
    """Outcome of importing one roster."""

    imported_count: int
    records: list[AssetRecord] = field(default_factory=list["AssetRecord"])
    rejected: list[RejectedRow] = field(default_factory=list["RejectedRow"])
    dropped_rows: int = 0


def import_rows(
    rows: Iterable[RawRow],
    *,
    store: AssetStore,
    resolver: HeaderResolver | None = None,
) -> ImportRosterResult:
    """Normalize ``rows`` and upsert every admissible candidate in one batch.

    Candidates that fail admission are reported in ``rejected`` and excluded from
    ``imported_count``. ``NoValidRowsError`` is raised, and the store left
    untouched, when no candidate can be admitted.
    """

    roster = normalize_rows(rows, resolver=resolver)

    admitted: list[AssetDraft] = []
    rejected: list[RejectedRow] = []
    for candidate in roster.candidates:
        try:
            validate_admission(candidate.draft)
        except RecordValidationError as exc:
            log.warning("Rejected row %s: %s", candidate.row_number, exc)
            rejected.append(
                RejectedRow(row_number=candidate.row_number, draft=candidate.draft, reason=str(exc))
            )
            continue
        admitted.append(candidate.draft)

    if not admitted:
        raise NoValidRowsError(roster.row_count, rejected)

    records = store.bulk_upsert(admitted)
    log.info(
        "Imported %s row(s) as %s record(s): rejected=%s, dropped=%s",
        len(admitted),
        len(records),
        len(rejected),
        roster.dropped_rows,
    )
    return ImportRosterResult(
        imported_count=len(admitted),
        records=records,
        rejected=rejected,
        dropped_rows=roster.dropped_rows,
    )
