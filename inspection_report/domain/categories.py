"""
inspection_report/domain/categories.py

Canonical facility categories recognised in inspection reports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

# Labels exactly as report producers write them, in report order.
FACILITY_CATEGORIES: tuple[str, ...] = (
    "przedsiębiorstwa podmiotów leczniczych",
    "jednostki organizacyjne systemu oświaty",
    "jednostki organizacyjne pomocy społecznej",
    "uczelnie wyższe",
    "zakłady pracy",
    "obiekty kultury i wypoczynku",
    "lokale gastronomiczno-rozrywkowe",
    "obiekty służące obsłudze podróżnych",
    "pomieszczenia obiektów sportowych",
    "inne pomieszczenia użytku publicznego",
)


@dataclass(frozen=True)
class CategorySchema:
    """
    Immutable, ordered set of canonical category labels.
    """

    labels: tuple[str, ...] = FACILITY_CATEGORIES

    def __post_init__(self) -> None:
        labels = tuple(self.labels)
        if not labels:
            raise ValueError("Category schema must contain at least one label.")
        if any(not label or not label.strip() for label in labels):
            raise ValueError("Category labels must be non-empty.")
        if len(set(labels)) != len(labels):
            raise ValueError("Category labels must be unique.")
        object.__setattr__(self, "labels", labels)

    def __contains__(self, label: object) -> bool:
        return label in self.labels

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels)

    def __len__(self) -> int:
        return len(self.labels)


DEFAULT_SCHEMA = CategorySchema()
