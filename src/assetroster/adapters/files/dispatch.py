"""Choose the row source for an uploaded file by extension or media type."""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import PurePath
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from assetroster.adapters.files.csv_source import read_csv_rows
from assetroster.adapters.files.workbook_source import read_workbook_rows
from assetroster.domain.errors import UnsupportedFormatError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from assetroster.domain.ports import RawRow, RowSource

log = logging.getLogger(__name__)


class FileFormat(StrEnum):
    CSV = "csv"
    SPREADSHEET = "spreadsheet"


FORMAT_BY_EXTENSION: Final[Mapping[str, FileFormat]] = MappingProxyType(
    {
        ".csv": FileFormat.CSV,
        ".xlsx": FileFormat.SPREADSHEET,
        ".xlsm": FileFormat.SPREADSHEET,
        ".xltx": FileFormat.SPREADSHEET,
        ".xltm": FileFormat.SPREADSHEET,
    }
)

FORMAT_BY_MEDIA_TYPE: Final[Mapping[str, FileFormat]] = MappingProxyType(
    {
        "text/csv": FileFormat.CSV,
        # browsers on Windows report .csv uploads with the legacy Excel type
        "application/vnd.ms-excel": FileFormat.CSV,
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": (
            FileFormat.SPREADSHEET
        ),
        "application/vnd.ms-excel.sheet.macroenabled.12": FileFormat.SPREADSHEET,
    }
)

ROW_SOURCES: Final[Mapping[FileFormat, RowSource]] = MappingProxyType(
    {
        FileFormat.CSV: read_csv_rows,
        FileFormat.SPREADSHEET: read_workbook_rows,
    }
)


def detect_format(filename: str, media_type: str | None = None) -> FileFormat:
    """Return the format of ``filename``, trusting the extension before the media type."""

    extension = PurePath(filename).suffix.lower()
    detected = FORMAT_BY_EXTENSION.get(extension)
    if detected is None and media_type:
        essence = media_type.split(";", 1)[0].strip().lower()
        detected = FORMAT_BY_MEDIA_TYPE.get(essence)
    if detected is None:
        raise UnsupportedFormatError(filename, media_type)
    return detected


def row_source_for(filename: str, media_type: str | None = None) -> RowSource:
    return ROW_SOURCES[detect_format(filename, media_type)]


def read_rows(filename: str, payload: bytes, *, media_type: str | None = None) -> list[RawRow]:
    """Parse ``payload`` with the row source matching ``filename``."""

    file_format = detect_format(filename, media_type)
    log.info("Reading %s as %s (%s bytes)", filename, file_format, len(payload))
    return ROW_SOURCES[file_format](payload)
