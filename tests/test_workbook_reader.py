"""
tests/test_workbook_reader.py

Pytest unit tests for the workbook reader.

Workbooks are built in memory with openpyxl; no files on disk.
"""

from __future__ import annotations

import io

import pytest
from openpyxl import Workbook

from inspection_report.domain.categories import FACILITY_CATEGORIES
from inspection_report.domain.columns import (
    CATEGORY_COLUMN,
    INSPECTED_COLUMN,
    SMOKING_ROOM_COLUMN,
    SMOKING_ROOM_LEGACY_COLUMN,
)
from inspection_report.domain.errors import EmptyFileError, UnreadableFileError
from inspection_report.readers.workbook_reader import build_headers, is_data_row, read_workbook


def _uniform(inspected: int, compliant: int, smoking_room: int) -> list[tuple[str, int, int, int]]:
    return [(category, inspected, compliant, smoking_room) for category in FACILITY_CATEGORIES]


# ---------------------------------------------------------------------------
# read_workbook
# ---------------------------------------------------------------------------


class TestReadWorkbook:
    def test_reads_data_rows_with_sheet_positions(self, uniform_report: bytes) -> None:
        source = read_workbook("inspector_a.xlsx", uniform_report)

        assert source.filename == "inspector_a.xlsx"
        assert len(source.rows) == 10
        assert [row.row_index for row in source.rows] == list(range(6, 16))
        assert [row.get(CATEGORY_COLUMN) for row in source.rows] == list(FACILITY_CATEGORIES)

    def test_totals_and_subheader_rows_are_dropped(self, uniform_report: bytes) -> None:
        source = read_workbook("a.xlsx", uniform_report)

        categories = [str(row.get(CATEGORY_COLUMN)).lower() for row in source.rows]
        assert not any("razem" in category for category in categories)
        assert all(row.row_index is not None and row.row_index >= 6 for row in source.rows)

    def test_blank_header_cell_is_named_empty(self, uniform_report: bytes) -> None:
        row = read_workbook("a.xlsx", uniform_report).rows[0]

        assert SMOKING_ROOM_COLUMN in row
        assert row.get(SMOKING_ROOM_COLUMN) == 3
        assert row.get(INSPECTED_COLUMN) == 1

    def test_legacy_headers_are_kept_verbatim(self, legacy_report: bytes) -> None:
        row = read_workbook("legacy.xlsx", legacy_report).rows[0]

        assert row.get(SMOKING_ROOM_LEGACY_COLUMN) == 3
        assert SMOKING_ROOM_COLUMN not in row

    def test_total_marker_in_english_is_dropped(self, make_report) -> None:
        content = make_report(_uniform(1, 1, 1), with_totals=False, trailing_rows=[["", "Total", 10, 10, 10]])

        source = read_workbook("a.xlsx", content)

        assert len(source.rows) == 10

    def test_trailing_blank_rows_are_dropped(self, make_report) -> None:
        content = make_report(_uniform(1, 1, 1), trailing_rows=[[None, None], ["", "   ", None]])

        assert len(read_workbook("a.xlsx", content).rows) == 10

    def test_rows_past_the_window_keep_their_position(self, make_report) -> None:
        rows = _uniform(1, 1, 1) + [("zakłady pracy", 9, 9, 9)]

        source = read_workbook("a.xlsx", make_report(rows, with_totals=False))

        assert source.rows[-1].row_index == 16

    def test_only_first_sheet_is_read(self, make_report) -> None:
        from openpyxl import load_workbook

        workbook = load_workbook(io.BytesIO(make_report(_uniform(1, 2, 3))))
        extra = workbook.create_sheet("Notes")
        for _ in range(6):
            extra.append(["x", "zakłady pracy", 100, 100, 100])
        buffer = io.BytesIO()
        workbook.save(buffer)

        source = read_workbook("a.xlsx", buffer.getvalue())

        assert len(source.rows) == 10
        assert all(row.get(INSPECTED_COLUMN) == 1 for row in source.rows)

    def test_header_only_file_is_empty(self, make_report) -> None:
        with pytest.raises(EmptyFileError) as ctx:
            read_workbook("empty.xlsx", make_report([]))

        assert ctx.value.filename == "empty.xlsx"
        assert ctx.value.code == "no_data"

    def test_blank_workbook_is_empty(self) -> None:
        buffer = io.BytesIO()
        Workbook().save(buffer)

        with pytest.raises(EmptyFileError):
            read_workbook("blank.xlsx", buffer.getvalue())

    def test_garbage_xlsx_is_unreadable(self) -> None:
        with pytest.raises(UnreadableFileError) as ctx:
            read_workbook("broken.xlsx", b"definitely not a zip archive")

        assert ctx.value.filename == "broken.xlsx"

    def test_garbage_xls_is_unreadable(self) -> None:
        with pytest.raises(UnreadableFileError):
            read_workbook("broken.xls", b"definitely not an OLE2 document")

    def test_custom_header_offset(self) -> None:
        workbook = Workbook()
        sheet = workbook.active
        sheet.append([None, CATEGORY_COLUMN, INSPECTED_COLUMN])
        sheet.append([1, "uczelnie wyższe", 5])
        buffer = io.BytesIO()
        workbook.save(buffer)

        source = read_workbook("a.xlsx", buffer.getvalue(), header_row_index=0)

        assert source.rows[0].row_index == 1
        assert source.rows[0].get(INSPECTED_COLUMN) == 5


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestBuildHeaders:
    def test_blank_and_duplicate_names(self) -> None:
        headers = build_headers(["Lp.", None, " ", "A", "A"], width=6)

        assert headers == ["Lp.", "__EMPTY", "__EMPTY_1", "A", "A_1", "__EMPTY_2"]

    def test_header_text_is_trimmed(self) -> None:
        assert build_headers([f"  {CATEGORY_COLUMN} "]) == [CATEGORY_COLUMN]


class TestIsDataRow:
    @pytest.mark.parametrize("value", [None, "", "   ", "RAZEM:", "razem", "Razem ogółem", "TOTAL"])
    def test_non_data(self, value: object) -> None:
        assert is_data_row(value) is False

    def test_category_is_data(self) -> None:
        assert is_data_row("zakłady pracy") is True
