"""Read the first worksheet of an Excel workbook into raw rows."""

from __future__ import annotations

import io
import logging
import zipfile
from typing import TYPE_CHECKING

from openpyxl import load_workbook
from openpyxl.cell.rich_text import CellRichText
from openpyxl.utils.exceptions import InvalidFileException

from assetroster.domain.errors import ParseError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from openpyxl.cell.cell import Cell
    from openpyxl.workbook.workbook import Workbook

    from assetroster.domain.ports import RawRow

log = logging.getLogger(__name__)


def cell_value(cell: Cell | None) -> object:
    """Unwrap a cell to the value shown in Excel.

    Formula cells give their cached result (the workbook is opened with
    ``data_only``), hyperlink cells give their display text, rich text is
    flattened, and empty cells give an empty string.
    """

    if cell is None:
        return ""
    value = cell.value
    if value is None:
        return ""
    if isinstance(value, CellRichText):
        return str(value)
    return value


def header_text(cell: Cell) -> str:
    value = cell_value(cell)
    return str(value).strip()


def open_workbook(payload: bytes) -> Workbook:
    try:
        return load_workbook(io.BytesIO(payload), data_only=True, rich_text=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as exc:
        raise ParseError(f"File is not a readable Excel workbook: {exc}") from exc


def read_workbook_rows(payload: bytes) -> list[RawRow]:
    """Parse workbook bytes: row 1 holds headers, data starts on row 2.

    Columns are matched to headers by position; columns without header text are
    ignored and rows without any value are skipped.
    """

    workbook = open_workbook(payload)
    try:
        if not workbook.worksheets:
            raise ParseError("Workbook contains no worksheet")
        worksheet = workbook.worksheets[0]

        row_iter: Iterable[tuple[Cell, ...]] = worksheet.iter_rows()
        header_cells = next(iter(row_iter), None)
        if header_cells is None:
            log.debug("Worksheet %r is empty", worksheet.title)
            return []

        headers = {
            index: text
            for index, cell in enumerate(header_cells)
            if (text := header_text(cell))
        }

        rows: list[RawRow] = []
        for cells in worksheet.iter_rows(min_row=2):
            if all(cell.value is None for cell in cells):
                continue
            rows.append(
                {
                    header: cell_value(cells[index] if index < len(cells) else None)
                    for index, header in headers.items()
                }
            )
    finally:
        workbook.close()

    log.debug("Read %s row(s) from worksheet %r", len(rows), worksheet.title)
    return rows
