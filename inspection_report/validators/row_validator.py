"""
inspection_report/validators/row_validator.py

Row-level validation and count coercion for inspection report rows.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any

from inspection_report.domain.columns import (
    CATEGORY_COLUMN,
    COMPLIANT_COLUMN,
    COMPLIANT_LEGACY_COLUMN,
    INSPECTED_COLUMN,
    SMOKING_ROOM_COLUMN,
    SMOKING_ROOM_LEGACY_COLUMN,
)
from inspection_report.domain.errors import EmptyFileError, ValidationError
from inspection_report.domain.facility_report import (
    RawRow,
    RowValidationError,
    SourceFile,
    ValidatedFile,
    ValidatedRow,
)

# Canonical field -> accepted source columns, in precedence order.
FIELD_SOURCES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("category", (CATEGORY_COLUMN,)),
    ("inspected_count", (INSPECTED_COLUMN,)),
    ("compliant_count", (COMPLIANT_COLUMN, COMPLIANT_LEGACY_COLUMN)),
    ("smoking_room_count", (SMOKING_ROOM_COLUMN, SMOKING_ROOM_LEGACY_COLUMN)),
)


def coerce_count(value: Any) -> int:
    """
    Coerce one spreadsheet cell into a non-negative integer count.

    Precedence:
    1. ``None``, empty or whitespace-only strings -> 0
    2. ``bool`` -> 0 (a checkbox is not a count)
    3. ``int`` -> passthrough
    4. ``float`` -> ``int`` when it holds a whole number
    5. ``str`` -> stripped and parsed as a decimal number
    6. anything else, negative, fractional or non-finite -> 0

    Never raises.
    """

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value >= 0 else 0
    if isinstance(value, float):
        return _whole_non_negative(value)
    if isinstance(value, Decimal):
        return _whole_non_negative_decimal(value)
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return 0
        try:
            parsed = Decimal(raw)
        except (InvalidOperation, ValueError):
            return 0
        return _whole_non_negative_decimal(parsed)
    return 0


def _whole_non_negative(number: float) -> int:
    if not math.isfinite(number) or number < 0 or not number.is_integer():
        return 0
    return int(number)


def _whole_non_negative_decimal(number: Decimal) -> int:
    if not number.is_finite() or number < 0 or number != number.to_integral_value():
        return 0
    return int(number)


def resolve_field(raw_row: RawRow, sources: tuple[str, ...]) -> Any:
    """
    Return the value of the first source column present in the row.

    A present-but-empty primary column still wins over the fallback; values
    from different source columns are never combined.
    """

    for column in sources:
        if column in raw_row:
            return raw_row.get(column)
    return None


class InspectionRowValidator:
    """
    Validates raw rows and resolves legacy column names.
    """

    def __init__(
        self,
        *,
        field_sources: tuple[tuple[str, tuple[str, ...]], ...] = FIELD_SOURCES,
    ) -> None:
        self._field_sources = field_sources

    def validate_row(
        self,
        raw_row: RawRow,
        *,
        position: int | None = None,
    ) -> tuple[ValidatedRow | None, list[RowValidationError]]:
        """
        Validate one raw row.

        ``position`` is used in error details when the row carries no sheet
        index of its own.
        """

        resolved = {
            field: resolve_field(raw_row, sources)
            for field, sources in self._field_sources
        }
        row_index = raw_row.row_index if raw_row.row_index is not None else position

        errors: list[RowValidationError] = []
        category = resolved.get("category")
        if category is None or not str(category).strip():
            errors.append(
                RowValidationError(
                    row_index=row_index,
                    field="category",
                    message="Facility category is required.",
                    value=None if category is None else str(category),
                )
            )
            return None, errors

        return (
            ValidatedRow(
                category=str(category).strip(),
                inspected_count=coerce_count(resolved.get("inspected_count")),
                compliant_count=coerce_count(resolved.get("compliant_count")),
                smoking_room_count=coerce_count(resolved.get("smoking_room_count")),
                row_index=raw_row.row_index,
            ),
            [],
        )

    def validate_file(self, source_file: SourceFile) -> ValidatedFile:
        """
        Validate every row of a file; one bad row rejects the whole file.

        Raises
        ------
        EmptyFileError:  The file has no rows.
        ValidationError: At least one row failed; all row errors are attached.
        """

        if not source_file.rows:
            raise EmptyFileError("The file contains no data.", filename=source_file.filename)

        validated: list[ValidatedRow] = []
        errors: list[RowValidationError] = []
        for position, raw_row in enumerate(source_file.rows):
            row, row_errors = self.validate_row(raw_row, position=position)
            if row_errors:
                errors.extend(row_errors)
                continue
            if row is not None:
                validated.append(row)

        if errors:
            raise ValidationError(errors=errors, filename=source_file.filename)

        return ValidatedFile(filename=source_file.filename, rows=tuple(validated))
