"""Error taxonomy for roster import and the asset store."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from assetroster.domain.data_integration import RejectedRow


class RosterImportError(Exception):
    """Base class for failures while turning a file into roster candidates."""


class UnsupportedFormatError(RosterImportError):
    """Raised for files whose type is not recognised; nothing has been parsed."""

    def __init__(self, filename: str, media_type: str | None = None) -> None:
        self.filename = filename
        self.media_type = media_type
        detail = f" (media type {media_type})" if media_type else ""
        super().__init__(
            f"Unsupported file type for {filename!r}{detail}; expected .csv or .xlsx"
        )


class ParseError(RosterImportError):
    """Raised when file content cannot be read as rows."""

    def __init__(self, message: str, *, row_number: int | None = None) -> None:
        self.row_number = row_number
        super().__init__(message)


class NoValidRowsError(RosterImportError):
    """Raised when a file parsed cleanly but yielded nothing the store admits."""

    def __init__(self, row_count: int, rejected: Sequence[RejectedRow] = ()) -> None:
        self.row_count = row_count
        self.rejected = tuple(rejected)
        message = (
            f"No valid rows found in {row_count} row(s); "
            "check the header names (Staff ID, Full Name)"
        )
        if self.rejected:
            message += f"; {len(self.rejected)} row(s) failed validation"
        super().__init__(message)


class RecordValidationError(ValueError):
    """Raised when a record violates the store admission rules."""

    def __init__(self, message: str, *, staff_id: str, field: str) -> None:
        self.staff_id = staff_id
        self.field = field
        super().__init__(message)


class StoreError(RuntimeError):
    """Base class for persistence failures."""


class StoreWriteError(StoreError):
    """Raised when the persistence engine fails to apply a write."""


class StoreReadError(StoreError):
    """Raised when the persistence engine fails to answer a read."""


class AssetNotFoundError(StoreError, LookupError):
    """Raised when an edit targets a staff ID the store does not hold."""

    def __init__(self, staff_id: str) -> None:
        self.staff_id = staff_id
        super().__init__(f"No asset stored for staff ID {staff_id!r}")
