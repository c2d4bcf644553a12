"""
inspection_report/services/aggregation_service.py

Folds validated rows from one or more files into one AggregatedSummary.

Fold rules
----------
- The summary is seeded with every canonical category at zero.
- Rows carrying a sheet ``row_index`` outside the data window are skipped.
  Rows without an index (built by hand, not read from a sheet) are always
  considered.
- A row whose category matches a canonical label exactly adds its three
  counters into that bucket; any other category is skipped with an
  ``unknown_category`` diagnostic.

Each file is folded into its own summary and the per-file summaries are
merged with ``AggregatedSummary.merge``, so file order and row order never
change the totals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from inspection_report.domain.categories import DEFAULT_SCHEMA, CategorySchema
from inspection_report.domain.facility_report import (
    AggregatedSummary,
    AggregationDiagnostic,
    Bucket,
    ValidatedFile,
    ValidatedRow,
)

logger = logging.getLogger(__name__)

DIAGNOSTIC_UNKNOWN_CATEGORY = "unknown_category"
DIAGNOSTIC_OUTSIDE_WINDOW = "outside_data_window"
DIAGNOSTIC_DUPLICATE_CATEGORY = "duplicate_category"


@dataclass(frozen=True)
class DataWindow:
    """
    Inclusive range of 0-based sheet rows that hold aggregable data.
    """

    start: int = 6
    end: int = 15

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid data window [{self.start}, {self.end}].")

    def contains(self, row_index: int | None) -> bool:
        if row_index is None:
            return True
        return self.start <= row_index <= self.end


DEFAULT_DATA_WINDOW = DataWindow()


class FacilityAggregator:
    """
    Pure, order-independent fold of validated files into category buckets.

    Parameters
    ----------
    schema:
        Canonical categories; the summary always holds exactly these keys.
    data_window:
        Positional row range treated as data within each source sheet.
    """

    def __init__(
        self,
        *,
        schema: CategorySchema = DEFAULT_SCHEMA,
        data_window: DataWindow = DEFAULT_DATA_WINDOW,
    ) -> None:
        self._schema = schema
        self._window = data_window

    @property
    def schema(self) -> CategorySchema:
        return self._schema

    def empty_summary(self) -> AggregatedSummary:
        return AggregatedSummary.zero(self._schema)

    def aggregate(
        self,
        files: Sequence[ValidatedFile],
        *,
        diagnostics: list[AggregationDiagnostic] | None = None,
    ) -> AggregatedSummary:
        """
        Aggregate all *files* into one summary.

        An empty sequence yields the all-zero summary. Soft warnings are
        logged and, when *diagnostics* is given, appended to it.
        """

        summary = self.empty_summary()
        for validated_file in files:
            summary = summary.merge(self.fold_file(validated_file, diagnostics=diagnostics))

        totals = summary.totals()
        logger.info(
            "Aggregated files=%d inspected=%d compliant=%d with_smoking_room=%d",
            len(files),
            totals.inspected,
            totals.compliant,
            totals.with_smoking_room,
        )
        return summary

    def fold_file(
        self,
        validated_file: ValidatedFile,
        *,
        diagnostics: list[AggregationDiagnostic] | None = None,
    ) -> AggregatedSummary:
        """
        Fold the rows of a single file into a fresh summary.
        """

        totals: dict[str, Bucket] = {label: Bucket.zero() for label in self._schema}
        seen: set[str] = set()

        for row in validated_file.rows:
            if not self._window.contains(row.row_index):
                self._flag_outside_window(validated_file.filename, row, diagnostics)
                continue

            if row.category not in totals:
                self._emit(
                    diagnostics,
                    AggregationDiagnostic(
                        code=DIAGNOSTIC_UNKNOWN_CATEGORY,
                        filename=validated_file.filename,
                        message=f"Facility category {row.category!r} is not a known category; row skipped.",
                        row_index=row.row_index,
                        category=row.category,
                    ),
                )
                continue

            if row.category in seen:
                self._emit(
                    diagnostics,
                    AggregationDiagnostic(
                        code=DIAGNOSTIC_DUPLICATE_CATEGORY,
                        filename=validated_file.filename,
                        message=f"Facility category {row.category!r} appears more than once; counts were summed.",
                        row_index=row.row_index,
                        category=row.category,
                    ),
                )
            seen.add(row.category)
            totals[row.category] = totals[row.category] + Bucket.from_row(row)

        return AggregatedSummary(entries=tuple((label, totals[label]) for label in self._schema))

    def _flag_outside_window(
        self,
        filename: str,
        row: ValidatedRow,
        diagnostics: list[AggregationDiagnostic] | None,
    ) -> None:
        # Only recognised rows with data are worth reporting; title and
        # sub-header rows routinely fall outside the window.
        if row.category not in self._schema or Bucket.from_row(row).is_zero():
            return
        self._emit(
            diagnostics,
            AggregationDiagnostic(
                code=DIAGNOSTIC_OUTSIDE_WINDOW,
                filename=filename,
                message=(
                    f"Row {row.row_index} lies outside data rows "
                    f"{self._window.start}-{self._window.end}; row skipped."
                ),
                row_index=row.row_index,
                category=row.category,
            ),
        )

    @staticmethod
    def _emit(
        diagnostics: list[AggregationDiagnostic] | None,
        diagnostic: AggregationDiagnostic,
    ) -> None:
        logger.warning(
            "Aggregation %s file=%r row=%s: %s",
            diagnostic.code,
            diagnostic.filename,
            diagnostic.row_index,
            diagnostic.message,
        )
        if diagnostics is not None:
            diagnostics.append(diagnostic)
