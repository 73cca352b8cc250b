"""Read delimited text exports into raw rows keyed by header text."""

from __future__ import annotations

import csv
import io
import logging
from typing import TYPE_CHECKING, Final

from assetroster.domain.errors import ParseError

if TYPE_CHECKING:
    from assetroster.domain.ports import RawRow

log = logging.getLogger(__name__)

CANDIDATE_DELIMITERS: Final[str] = ",;\t|"
SNIFF_SAMPLE_SIZE: Final[int] = 64 * 1024
_OVERFLOW_KEY: Final[str] = "\x00overflow"


def decode_payload(payload: bytes) -> str:
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"CSV file is not valid UTF-8 text: {exc}") from exc


def skip_leading_blank_lines(text: str) -> tuple[str, int]:
    """Drop whitespace-only lines before the header; return the text and lines dropped."""

    lines = text.splitlines(keepends=True)
    skipped = 0
    while skipped < len(lines) and not lines[skipped].strip():
        skipped += 1
    return "".join(lines[skipped:]), skipped


def sniff_delimiter(text: str) -> str:
    """Guess the delimiter from the first lines, falling back to a comma."""

    sample = skip_leading_blank_lines(text[:SNIFF_SAMPLE_SIZE])[0]
    header_line = sample.splitlines()[0] if sample else ""
    if not any(delimiter in header_line for delimiter in CANDIDATE_DELIMITERS):
        return ","
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=CANDIDATE_DELIMITERS)
    except csv.Error:
        return ","
    return dialect.delimiter


def read_csv_rows(payload: bytes, *, delimiter: str | None = None) -> list[RawRow]:
    """Parse CSV bytes; the first non-blank line is the header row.

    Blank lines are skipped and short rows are padded with empty strings. A row
    with more fields than the header, or broken quoting, raises ``ParseError``.
    """

    text, skipped = skip_leading_blank_lines(decode_payload(payload))
    active_delimiter = delimiter or sniff_delimiter(text)
    reader = csv.DictReader(
        io.StringIO(text, newline=""),
        delimiter=active_delimiter,
        restkey=_OVERFLOW_KEY,
        restval="",
        strict=True,
    )

    rows: list[RawRow] = []
    try:
        for row in reader:
            if _OVERFLOW_KEY in row:
                raise ParseError(
                    f"Line {reader.line_num + skipped} has more fields than the header row",
                    row_number=len(rows) + 1,
                )
            rows.append(row)
    except csv.Error as exc:
        raise ParseError(f"Malformed CSV near line {reader.line_num + skipped}: {exc}") from exc

    log.debug("Read %s CSV row(s) with delimiter %r", len(rows), active_delimiter)
    return rows
