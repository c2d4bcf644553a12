"""
inspection_report/domain/columns.py

Source column headers used by inspection report producers.

Current exports put the counter group title over columns D:E of the header
row and the individual counter names in the row below, so the smoking-room
counter arrives under an unlabelled header cell. Older exports carried the
counter names directly in the header row.
"""

from __future__ import annotations

CATEGORY_COLUMN = "RODZAJ OBIEKTU"
INSPECTED_COLUMN = "LICZBA SKONTROLOWANYCH OBIEKTÓW"
COMPLIANT_COLUMN = "LICZBA OBIEKTÓW, W KTÓRYCH USTAWA JEST REALIZOWANA"
COMPLIANT_LEGACY_COLUMN = "OGÓŁEM"
SMOKING_ROOM_COLUMN = "__EMPTY"
SMOKING_ROOM_LEGACY_COLUMN = "W TYM Z WYKORZYSTANIEM PALARNI"

# Name given to blank header cells; repeats get a numeric suffix.
BLANK_HEADER_NAME = "__EMPTY"

TOTALS_MARKERS: tuple[str, ...] = ("razem", "total")
