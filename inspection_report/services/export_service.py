"""
inspection_report/services/export_service.py

Serializes an AggregatedSummary into the formatted report workbook.

Sheet layout (1-indexed rows, columns A:E)
-----------------------------------------
    1-2   empty
    3     title                                   merged A3:E3
    4     subtitle with region and period         merged A4:E4
    5     empty
    6     Lp. | RODZAJ OBIEKTU | LICZBA SKONTROLOWANYCH OBIEKTÓW |
          LICZBA OBIEKTÓW, W KTÓRYCH USTAWA JEST REALIZOWANA (merged D6:E6)
    7     sub-header: OGÓŁEM | W TYM Z WYKORZYSTANIEM PALARNI
          (A6:A7, B6:B7 and C6:C7 merged)
    8-17  one row per canonical category, zero counters left blank
    18    RAZEM: and the grand totals

Downstream consumers parse the report positionally, so the merged ranges
and column widths are part of the output contract.

Export is a best-effort side output: public methods return a success flag
and log the cause of any failure instead of raising.
"""

from __future__ import annotations

import io
import logging
import os
from datetime import date
from pathlib import Path
from typing import BinaryIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from inspection_report.domain.categories import DEFAULT_SCHEMA, CategorySchema
from inspection_report.domain.columns import (
    CATEGORY_COLUMN,
    COMPLIANT_COLUMN,
    COMPLIANT_LEGACY_COLUMN,
    INSPECTED_COLUMN,
    SMOKING_ROOM_LEGACY_COLUMN,
)
from inspection_report.domain.errors import ExportError
from inspection_report.domain.facility_report import AggregatedSummary

logger = logging.getLogger(__name__)

SHEET_TITLE = "Ochrona Zdrowia"
REPORT_TITLE = (
    "Aktualna sytuacja w zakresie realizacji ustawy o ochronie zdrowia "
    "przed następstwami używania tytoniu i wyrobów tytoniowych"
)
TOTALS_LABEL = "RAZEM:"
INDEX_HEADER = "Lp."

TITLE_ROW = 3
SUBTITLE_ROW = 4
HEADER_ROW = 6
SUBHEADER_ROW = 7
FIRST_DATA_ROW = 8

MERGED_RANGES: tuple[str, ...] = (
    "A3:E3",
    "A4:E4",
    "D6:E6",
    "A6:A7",
    "B6:B7",
    "C6:C7",
)
COLUMN_WIDTHS: tuple[int, ...] = (5, 45, 30, 15, 30)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def export_filename(today: date | None = None) -> str:
    """
    Return ``summary_<YYYY-MM-DD>.xlsx`` for *today* (defaults to the current date).
    """

    return f"summary_{(today or date.today()).isoformat()}.xlsx"


def _blank_if_zero(value: int) -> int | None:
    return value if value else None


class SummaryExporter:
    """
    Builds and writes the report workbook for one aggregated summary.
    """

    def __init__(
        self,
        *,
        schema: CategorySchema = DEFAULT_SCHEMA,
        region_name: str = "zachodniopomorskim",
    ) -> None:
        self._schema = schema
        self._region_name = region_name

    def subtitle(self, period_label: str) -> str:
        return f"w województwie {self._region_name}, w miesiącu: {period_label}"

    def build_workbook(self, summary: AggregatedSummary, period_label: str) -> Workbook:
        """
        Lay out the report sheet; raises whatever openpyxl or a malformed
        summary raises.
        """

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = SHEET_TITLE

        bold = Font(bold=True)
        centered = Alignment(horizontal="center", vertical="center", wrap_text=True)

        sheet.cell(row=TITLE_ROW, column=1, value=REPORT_TITLE).font = bold
        sheet.cell(row=SUBTITLE_ROW, column=1, value=self.subtitle(period_label))

        header = (INDEX_HEADER, CATEGORY_COLUMN, INSPECTED_COLUMN, COMPLIANT_COLUMN)
        for column, text in enumerate(header, start=1):
            cell = sheet.cell(row=HEADER_ROW, column=column, value=text)
            cell.font = bold
            cell.alignment = centered
        for column, text in ((4, COMPLIANT_LEGACY_COLUMN), (5, SMOKING_ROOM_LEGACY_COLUMN)):
            cell = sheet.cell(row=SUBHEADER_ROW, column=column, value=text)
            cell.font = bold
            cell.alignment = centered

        row_number = FIRST_DATA_ROW
        for index, label in enumerate(self._schema, start=1):
            bucket = summary[label]
            sheet.cell(row=row_number, column=1, value=index)
            sheet.cell(row=row_number, column=2, value=label)
            sheet.cell(row=row_number, column=3, value=_blank_if_zero(bucket.inspected))
            sheet.cell(row=row_number, column=4, value=_blank_if_zero(bucket.compliant))
            sheet.cell(row=row_number, column=5, value=_blank_if_zero(bucket.with_smoking_room))
            row_number += 1

        totals = summary.totals()
        sheet.cell(row=row_number, column=1, value=TOTALS_LABEL).font = bold
        sheet.cell(row=row_number, column=3, value=totals.inspected).font = bold
        sheet.cell(row=row_number, column=4, value=totals.compliant).font = bold
        sheet.cell(row=row_number, column=5, value=totals.with_smoking_room).font = bold

        for cell_range in MERGED_RANGES:
            sheet.merge_cells(cell_range)

        for column, width in enumerate(COLUMN_WIDTHS, start=1):
            sheet.column_dimensions[get_column_letter(column)].width = width

        return workbook

    def write(self, summary: AggregatedSummary, period_label: str, target: BinaryIO) -> bool:
        """
        Serialize the report into *target*. Returns False on any failure.
        """

        try:
            self._render(summary, period_label, target)
        except ExportError as exc:
            logger.exception("Report export failed period=%r: %s", period_label, exc.__cause__ or exc)
            return False
        return True

    def export(
        self,
        summary: AggregatedSummary,
        period_label: str,
        directory: str | Path,
        *,
        today: date | None = None,
    ) -> bool:
        """
        Write ``summary_<date>.xlsx`` into *directory*. Returns False on any failure.

        The workbook is rendered in memory and moved into place only once it
        is complete; a failed export leaves any existing file untouched.
        """

        buffer = io.BytesIO()
        try:
            self._render(summary, period_label, buffer)
        except ExportError as exc:
            logger.exception("Report export failed period=%r: %s", period_label, exc.__cause__ or exc)
            return False

        output_dir = Path(directory)
        output_path = output_dir / export_filename(today)
        partial_path = output_path.with_name(f"{output_path.name}.partial")
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            partial_path.write_bytes(buffer.getvalue())
            os.replace(partial_path, output_path)
        except OSError as exc:
            logger.error("Report export could not write to %s: %s", directory, exc)
            if partial_path.exists():
                partial_path.unlink()
            return False

        logger.info("Report exported path=%s period=%r", output_path, period_label)
        return True

    def _render(self, summary: AggregatedSummary, period_label: str, target: BinaryIO) -> None:
        try:
            workbook = self.build_workbook(summary, period_label)
            workbook.save(target)
        except Exception as exc:  # noqa: BLE001
            raise ExportError("Unable to serialize report workbook.") from exc
