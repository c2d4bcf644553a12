"""
inspection_report/readers package marker.
"""

from inspection_report.readers.workbook_reader import build_headers, is_data_row, read_workbook

__all__ = [
    "build_headers",
    "is_data_row",
    "read_workbook",
]
