"""Turn raw roster rows into ``AssetDraft`` candidates."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import TYPE_CHECKING

from assetroster.domain.ingest.headers import HeaderResolver
from assetroster.domain.model import AssetDraft, CanonicalField

if TYPE_CHECKING:
    from collections.abc import Iterable

    from assetroster.domain.model import Ordinal
    from assetroster.domain.ports import RawRow

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NormalizedRow:
    """A candidate together with its 1-based position among the data rows."""

    row_number: int
    draft: AssetDraft


@dataclass(slots=True)
class NormalizedRoster:
    """Normalizer output for one file."""

    row_count: int = 0
    candidates: list[NormalizedRow] = field(default_factory=list["NormalizedRow"])

    @property
    def dropped_rows(self) -> int:
        """Rows that carried neither a staff ID nor a full name."""

        return self.row_count - len(self.candidates)


def clean_value(value: object) -> str:
    """Reduce a raw cell value to trimmed text.

    Composite values (mappings such as ``{"text": ..., "hyperlink": ...}`` or
    ``{"formula": ..., "result": ...}``) yield their text, else their computed
    result, else an empty string.
    """

    if value is None:
        return ""
    if isinstance(value, Mapping):
        for key in ("text", "result"):
            inner = value.get(key)
            if inner is not None and inner != "":
                return clean_value(inner)
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    return str(value).strip()


def coerce_ordinal(value: object) -> Ordinal | None:
    """Coerce a display ordinal to a number.

    Non-numeric, non-finite and zero values have no ordinal and give ``None``;
    display code falls back to positional numbering for those.
    """

    number: float
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value or None
    if isinstance(value, float):
        number = value
    else:
        text = clean_value(value)
        if not text:
            return None
        digits = text[1:] if text[0] in "+-" else text
        if digits.isdecimal():
            return int(text) or None
        try:
            number = float(text)
        except ValueError:
            return None

    if not math.isfinite(number) or number == 0:
        return None
    if number.is_integer():
        return int(number)
    return number


def normalize_row(row: RawRow, resolver: HeaderResolver) -> AssetDraft | None:
    """Return the candidate for ``row``, or ``None`` when it carries no identity."""

    staff_id = clean_value(resolver.resolve(row, CanonicalField.STAFF_ID))
    full_name = clean_value(resolver.resolve(row, CanonicalField.FULL_NAME))
    if not staff_id and not full_name:
        return None
    return AssetDraft(
        staff_id=staff_id,
        full_name=full_name,
        organization_name=clean_value(resolver.resolve(row, CanonicalField.ORGANIZATION_NAME)),
        no=coerce_ordinal(resolver.resolve(row, CanonicalField.NO)),
    )


def normalize_rows(
    rows: Iterable[RawRow],
    *,
    resolver: HeaderResolver | None = None,
) -> NormalizedRoster:
    """Normalize every row, keeping those with a staff ID or a full name."""

    active_resolver = resolver or HeaderResolver()
    roster = NormalizedRoster()
    for row_number, row in enumerate(rows, start=1):
        roster.row_count += 1
        draft = normalize_row(row, active_resolver)
        if draft is None:
            log.debug("Dropping row %s: no staff ID or full name", row_number)
            continue
        roster.candidates.append(NormalizedRow(row_number=row_number, draft=draft))

    log.debug(
        "Normalized %s row(s): candidates=%s, dropped=%s",
        roster.row_count,
        len(roster.candidates),
        roster.dropped_rows,
    )
    return roster
