from __future__ import annotations

import pytest

from assetroster.adapters.files import (
    FileFormat,
    detect_format,
    read_rows,
    read_workbook_rows,
    row_source_for,
)
from assetroster.domain.errors import UnsupportedFormatError
from assetroster.domain.ports import RowSource
from tests.helpers.assets import build_workbook, csv_bytes


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("roster.csv", FileFormat.CSV),
        ("ROSTER.CSV", FileFormat.CSV),
        ("roster.xlsx", FileFormat.SPREADSHEET),
        ("roster.xlsm", FileFormat.SPREADSHEET),
    ],
)
def test_detects_format_from_extension(filename: str, expected: FileFormat) -> None:
    assert detect_format(filename) is expected


@pytest.mark.parametrize(
    ("media_type", "expected"),
    [
        ("text/csv", FileFormat.CSV),
        ("text/csv; charset=utf-8", FileFormat.CSV),
        ("application/vnd.ms-excel", FileFormat.CSV),
        (
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            FileFormat.SPREADSHEET,
        ),
    ],
)
def test_falls_back_to_media_type(media_type: str, expected: FileFormat) -> None:
    assert detect_format("upload", media_type) is expected


def test_extension_wins_over_media_type() -> None:
    assert detect_format("roster.xlsx", "text/csv") is FileFormat.SPREADSHEET


@pytest.mark.parametrize(
    ("filename", "media_type"),
    [
        ("roster.pdf", None),
        ("roster.xls", None),
        ("roster", None),
        ("roster.txt", "text/plain"),
    ],
)
def test_unknown_files_are_unsupported(filename: str, media_type: str | None) -> None:
    with pytest.raises(UnsupportedFormatError) as exc:
        detect_format(filename, media_type)

    assert exc.value.filename == filename


def test_read_rows_routes_to_matching_source() -> None:
    csv_rows = read_rows("roster.csv", csv_bytes("Staff ID,Full Name", "E1,Jane Doe"))
    workbook_rows = read_rows(
        "roster.xlsx",
        build_workbook([["Staff ID", "Full Name"], ["E1", "Jane Doe"]]),
    )

    assert csv_rows == workbook_rows == [{"Staff ID": "E1", "Full Name": "Jane Doe"}]


def test_read_rows_rejects_unsupported_before_parsing() -> None:
    with pytest.raises(UnsupportedFormatError):
        read_rows("roster.pdf", b"\x00\x01")


def test_row_source_for_returns_format_reader() -> None:
    source = row_source_for("roster.xlsx")

    assert source is read_workbook_rows
    assert isinstance(source, RowSource)
