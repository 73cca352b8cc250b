"""Format adapters turning roster files into raw rows."""

from __future__ import annotations

from .csv_source import read_csv_rows, sniff_delimiter
from .dispatch import FileFormat, detect_format, read_rows, row_source_for
from .workbook_source import read_workbook_rows

__all__ = [
    "FileFormat",
    "detect_format",
    "read_csv_rows",
    "read_rows",
    "read_workbook_rows",
    "row_source_for",
    "sniff_delimiter",
]
