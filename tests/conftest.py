"""
tests/conftest.py

Shared fixtures: in-memory inspection report workbooks laid out the way
inspectors' exports are.

Sheet layout produced by ``build_report_workbook`` (0-based rows):

    0-1   empty
    2     title
    3     subtitle
    4     header row (category, counters)
    5     counter sub-header (no category)
    6-15  one row per facility category
    16    RAZEM totals row
"""

from __future__ import annotations

import io
from typing import Any, Sequence

import pytest
from openpyxl import Workbook

from inspection_report.domain.categories import FACILITY_CATEGORIES
from inspection_report.domain.columns import (
    CATEGORY_COLUMN,
    COMPLIANT_COLUMN,
    COMPLIANT_LEGACY_COLUMN,
    INSPECTED_COLUMN,
    SMOKING_ROOM_LEGACY_COLUMN,
)

CURRENT_HEADER: list[Any] = ["Lp.", CATEGORY_COLUMN, INSPECTED_COLUMN, COMPLIANT_COLUMN, None]
CURRENT_SUBHEADER: list[Any] = [None, None, None, COMPLIANT_LEGACY_COLUMN, SMOKING_ROOM_LEGACY_COLUMN]
LEGACY_HEADER: list[Any] = [
    "Lp.",
    CATEGORY_COLUMN,
    INSPECTED_COLUMN,
    COMPLIANT_LEGACY_COLUMN,
    SMOKING_ROOM_LEGACY_COLUMN,
]


def build_report_workbook(
    data_rows: Sequence[Sequence[Any]],
    *,
    legacy: bool = False,
    with_totals: bool = True,
    trailing_rows: Sequence[Sequence[Any]] = (),
) -> bytes:
    """
    Build report workbook bytes.

    Each item of *data_rows* is ``(category, inspected, compliant, smoking_room)``.
    """

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Ochrona Zdrowia"

    sheet.append([])
    sheet.append([])
    sheet.append(["Aktualna sytuacja w zakresie realizacji ustawy"])
    sheet.append(["w województwie zachodniopomorskim, w miesiącu: sierpień 2025"])
    sheet.append(LEGACY_HEADER if legacy else CURRENT_HEADER)
    sheet.append([None, None, None, None, None] if legacy else CURRENT_SUBHEADER)

    totals = [0, 0, 0]
    for position, (category, inspected, compliant, smoking_room) in enumerate(data_rows, start=1):
        sheet.append([position, category, inspected, compliant, smoking_room])
        for index, value in enumerate((inspected, compliant, smoking_room)):
            totals[index] += value if isinstance(value, int) else 0

    if with_totals:
        sheet.append(["RAZEM:", None, *totals])
    for row in trailing_rows:
        sheet.append(list(row))

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def uniform_rows(inspected: int, compliant: int, smoking_room: int) -> list[tuple[str, int, int, int]]:
    return [(category, inspected, compliant, smoking_room) for category in FACILITY_CATEGORIES]


@pytest.fixture()
def uniform_report() -> bytes:
    """Current-format report with (1, 2, 3) for every category."""
    return build_report_workbook(uniform_rows(1, 2, 3))


@pytest.fixture()
def legacy_report() -> bytes:
    """Legacy-format report with (1, 2, 3) for every category."""
    return build_report_workbook(uniform_rows(1, 2, 3), legacy=True)


@pytest.fixture()
def make_report():
    """Factory building report workbook bytes; see ``build_report_workbook``."""
    return build_report_workbook
