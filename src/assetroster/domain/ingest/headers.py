"""Map raw column headers onto canonical fields via alias sets."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from assetroster.domain.model import CanonicalField

if TYPE_CHECKING:
    from assetroster.domain.ports import RawRow

DEFAULT_FIELD_ALIASES: Final[Mapping[CanonicalField, tuple[str, ...]]] = MappingProxyType(
    {
        CanonicalField.NO: ("No", "No."),
        CanonicalField.STAFF_ID: ("Staff ID", "ID", "Employee ID"),
        CanonicalField.FULL_NAME: ("Full Name", "Name", "Staff Name"),
        CanonicalField.ORGANIZATION_NAME: ("Organization Name", "Org", "Organization"),
    }
)


def normalize_header(header: str) -> str:
    """Normalize header text so matching ignores case and surrounding whitespace."""

    return header.strip().casefold()


@dataclass(frozen=True, slots=True)
class HeaderResolver:
    """Look up canonical fields in rows whose headers vary between exports.

    Aliases are tried in declaration order and the first alias present in the row
    wins. When several raw headers normalize to the same text, the first one in
    the row's key order is used.
    """

    aliases: Mapping[CanonicalField, Sequence[str]] = field(
        default_factory=lambda: DEFAULT_FIELD_ALIASES
    )

    def matched_header(self, row: RawRow, canonical: CanonicalField) -> str | None:
        """Return the raw header that supplies ``canonical`` in ``row``, if any."""

        index = _index_headers(row)
        for alias in self.aliases.get(canonical, ()):
            header = index.get(normalize_header(alias))
            if header is not None:
                return header
        return None

    def resolve(self, row: RawRow, canonical: CanonicalField) -> object | None:
        """Return the value of ``canonical`` in ``row``, or ``None`` if no header matches."""

        header = self.matched_header(row, canonical)
        if header is None:
            return None
        return row[header]


def _index_headers(row: RawRow) -> dict[str, str]:
    index: dict[str, str] = {}
    for key in row:
        if not isinstance(key, str):
            continue
        index.setdefault(normalize_header(key), key)
    return index
