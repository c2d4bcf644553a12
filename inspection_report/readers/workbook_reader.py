"""
inspection_report/readers/workbook_reader.py

Turns raw spreadsheet bytes into ordered RawRow records.

Only the first sheet is read. The header row sits at a fixed offset; every
row below it keeps its 0-based sheet position as ``row_index`` so the
aggregator can apply the positional data window later on.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Sequence
from zipfile import BadZipFile

import xlrd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from xlrd.compdoc import CompDocError

from inspection_report.domain.columns import BLANK_HEADER_NAME, CATEGORY_COLUMN, TOTALS_MARKERS
from inspection_report.domain.errors import EmptyFileError, UnreadableFileError
from inspection_report.domain.facility_report import RawRow, SourceFile

logger = logging.getLogger(__name__)

DEFAULT_HEADER_ROW_INDEX = 4
LEGACY_EXTENSION = ".xls"


def read_workbook(
    filename: str,
    content: bytes,
    *,
    header_row_index: int = DEFAULT_HEADER_ROW_INDEX,
    category_column: str = CATEGORY_COLUMN,
) -> SourceFile:
    """
    Parse the first sheet of a workbook into a SourceFile.

    Rows with a blank category cell (sub-headers, trailing blank rows) and the
    totals row are dropped.

    Raises
    ------
    UnreadableFileError: The bytes are not a readable workbook.
    EmptyFileError:      No data row survives filtering.
    """

    sheet_rows = _load_first_sheet(filename, content)
    if len(sheet_rows) <= header_row_index:
        raise EmptyFileError("The file contains no data.", filename=filename)

    width = max(len(row) for row in sheet_rows)
    headers = build_headers(sheet_rows[header_row_index], width=width)

    rows: list[RawRow] = []
    first_data_row = header_row_index + 1
    for position, cells in enumerate(sheet_rows[first_data_row:]):
        values = {
            header: cells[column] if column < len(cells) else None
            for column, header in enumerate(headers)
        }
        if not is_data_row(values.get(category_column)):
            continue
        rows.append(RawRow(values=values, row_index=first_data_row + position))

    if not rows:
        raise EmptyFileError("The file contains no data.", filename=filename)

    logger.debug(
        "Workbook read filename=%r sheet_rows=%d data_rows=%d",
        filename,
        len(sheet_rows),
        len(rows),
    )
    return SourceFile(filename=filename, rows=tuple(rows))


def build_headers(header_cells: Sequence[Any], *, width: int | None = None) -> list[str]:
    """
    Name every column from the header row.

    Blank cells become ``__EMPTY``, ``__EMPTY_1``, ...; duplicated names get
    the same numeric suffix treatment so no column is shadowed.
    """

    total = max(width or 0, len(header_cells))
    headers: list[str] = []
    seen: dict[str, int] = {}
    for column in range(total):
        raw = header_cells[column] if column < len(header_cells) else None
        name = str(raw).strip() if raw is not None else ""
        if not name:
            name = BLANK_HEADER_NAME
        count = seen.get(name, 0)
        seen[name] = count + 1
        headers.append(name if count == 0 else f"{name}_{count}")
    return headers


def is_data_row(category: Any) -> bool:
    """
    Return True when the category cell is filled and is not a totals marker.
    """

    if category is None:
        return False
    text = str(category).strip()
    if not text:
        return False
    lowered = text.lower()
    return not any(marker in lowered for marker in TOTALS_MARKERS)


def _load_first_sheet(filename: str, content: bytes) -> list[list[Any]]:
    if filename.lower().endswith(LEGACY_EXTENSION):
        return _load_xls(filename, content)
    return _load_xlsx(filename, content)


def _load_xlsx(filename: str, content: bytes) -> list[list[Any]]:
    try:
        workbook = load_workbook(io.BytesIO(content), data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, ValueError, OSError) as exc:
        raise UnreadableFileError(
            f"Could not read workbook: {exc}",
            filename=filename,
        ) from exc

    try:
        if not workbook.worksheets:
            raise EmptyFileError("The workbook has no sheets.", filename=filename)
        worksheet = workbook.worksheets[0]
        return [list(row) for row in worksheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _load_xls(filename: str, content: bytes) -> list[list[Any]]:
    try:
        book = xlrd.open_workbook(file_contents=content)
    except (xlrd.XLRDError, CompDocError, ValueError, OSError) as exc:
        raise UnreadableFileError(
            f"Could not read workbook: {exc}",
            filename=filename,
        ) from exc

    try:
        if book.nsheets == 0:
            raise EmptyFileError("The workbook has no sheets.", filename=filename)
        sheet = book.sheet_by_index(0)
        return [
            [value if value != "" else None for value in sheet.row_values(index)]
            for index in range(sheet.nrows)
        ]
    finally:
        book.release_resources()
