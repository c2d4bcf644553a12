"""
inspection_report/domain/facility_report.py

Domain models used by the report reconciliation flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping

from inspection_report.domain.categories import DEFAULT_SCHEMA, CategorySchema


@dataclass(frozen=True)
class RawRow:
    """
    One source sheet row keyed by column header.

    ``row_index`` is the 0-based sheet row the values came from; rows built
    by hand (tests, API payloads) may leave it unset.
    """

    values: Mapping[str, Any]
    row_index: int | None = None

    def get(self, column: str, default: Any = None) -> Any:
        return self.values.get(column, default)

    def __contains__(self, column: object) -> bool:
        return column in self.values


@dataclass(frozen=True)
class ValidatedRow:
    """
    Typed row ready for aggregation.
    """

    category: str
    inspected_count: int = 0
    compliant_count: int = 0
    smoking_room_count: int = 0
    row_index: int | None = None


@dataclass(frozen=True)
class RowValidationError:
    """
    One row validation error detail.
    """

    message: str
    row_index: int | None = None
    field: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class SourceFile:
    """
    File name plus the rows that survived header/footer filtering.
    """

    filename: str
    rows: tuple[RawRow, ...] = ()


@dataclass(frozen=True)
class ValidatedFile:
    """
    File whose rows all passed structural validation.
    """

    filename: str
    rows: tuple[ValidatedRow, ...] = ()


@dataclass(frozen=True)
class Bucket:
    """
    Three-counter accumulator for one facility category.
    """

    inspected: int = 0
    compliant: int = 0
    with_smoking_room: int = 0

    @classmethod
    def zero(cls) -> "Bucket":
        return cls()

    @classmethod
    def from_row(cls, row: ValidatedRow) -> "Bucket":
        return cls(
            inspected=row.inspected_count,
            compliant=row.compliant_count,
            with_smoking_room=row.smoking_room_count,
        )

    def __add__(self, other: "Bucket") -> "Bucket":
        if not isinstance(other, Bucket):
            return NotImplemented
        return Bucket(
            inspected=self.inspected + other.inspected,
            compliant=self.compliant + other.compliant,
            with_smoking_room=self.with_smoking_room + other.with_smoking_room,
        )

    def is_zero(self) -> bool:
        return not (self.inspected or self.compliant or self.with_smoking_room)

    def as_dict(self) -> dict[str, int]:
        return {
            "inspected": self.inspected,
            "compliant": self.compliant,
            "with_smoking_room": self.with_smoking_room,
        }


@dataclass(frozen=True)
class AggregatedSummary:
    """
    Buckets for every canonical category, in schema order.

    Instances are always fully populated: build them through ``zero`` and
    combine them with ``add`` / ``merge``, both of which return new objects.
    """

    entries: tuple[tuple[str, Bucket], ...]

    @classmethod
    def zero(cls, schema: CategorySchema = DEFAULT_SCHEMA) -> "AggregatedSummary":
        return cls(entries=tuple((label, Bucket.zero()) for label in schema))

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(label for label, _ in self.entries)

    def __getitem__(self, category: str) -> Bucket:
        for label, bucket in self.entries:
            if label == category:
                return bucket
        raise KeyError(category)

    def __contains__(self, category: object) -> bool:
        return any(label == category for label, _ in self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.entries)

    def items(self) -> tuple[tuple[str, Bucket], ...]:
        return self.entries

    def add(self, category: str, bucket: Bucket) -> "AggregatedSummary":
        """
        Return a copy with *bucket* added into *category*.
        """

        if category not in self:
            raise KeyError(category)
        return AggregatedSummary(
            entries=tuple(
                (label, current + bucket if label == category else current)
                for label, current in self.entries
            )
        )

    def merge(self, other: "AggregatedSummary") -> "AggregatedSummary":
        """
        Bucket-wise sum of two summaries over the same categories.
        """

        if set(self.categories) != set(other.categories):
            raise ValueError("Cannot merge summaries built from different category schemas.")
        return AggregatedSummary(
            entries=tuple((label, bucket + other[label]) for label, bucket in self.entries)
        )

    def totals(self) -> Bucket:
        total = Bucket.zero()
        for _, bucket in self.entries:
            total = total + bucket
        return total

    def as_dict(self) -> dict[str, dict[str, int]]:
        return {label: bucket.as_dict() for label, bucket in self.entries}


@dataclass(frozen=True)
class AggregationDiagnostic:
    """
    Soft warning raised while folding rows; never fails aggregation.
    """

    code: str
    filename: str
    message: str
    row_index: int | None = None
    category: str | None = None


@dataclass(frozen=True)
class AggregationReport:
    """
    Summary of all accepted files plus the diagnostics emitted on the way.
    """

    summary: AggregatedSummary
    accepted_files: tuple[str, ...] = ()
    diagnostics: tuple[AggregationDiagnostic, ...] = ()
