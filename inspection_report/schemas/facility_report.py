"""
inspection_report/schemas/facility_report.py

Response schemas for inspection report endpoints.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from inspection_report.domain.facility_report import AggregatedSummary, AggregationDiagnostic, Bucket
from inspection_report.services.report_batch_service import FileOutcome


class BucketResponse(BaseModel):
    """
    API response model for one three-counter bucket.
    """

    inspected: int = Field(..., ge=0)
    compliant: int = Field(..., ge=0)
    with_smoking_room: int = Field(..., ge=0)

    @classmethod
    def from_bucket(cls, bucket: Bucket) -> "BucketResponse":
        return cls(
            inspected=bucket.inspected,
            compliant=bucket.compliant,
            with_smoking_room=bucket.with_smoking_room,
        )


class CategorySummaryResponse(BucketResponse):
    """
    API response model for one canonical category row.
    """

    position: int = Field(..., ge=1)
    category: str


class FileStatusResponse(BaseModel):
    """
    API response model for the processing outcome of one file.
    """

    filename: str
    status: Literal["success", "error"]
    rows: int = Field(default=0, ge=0)
    error: dict[str, Any] | None = None

    @classmethod
    def from_outcome(cls, outcome: FileOutcome) -> "FileStatusResponse":
        return cls(
            filename=outcome.filename,
            status=outcome.status,
            rows=outcome.row_count,
            error=outcome.error.to_dict() if outcome.error is not None else None,
        )


class DiagnosticResponse(BaseModel):
    """
    API response model for one aggregation warning.
    """

    code: str
    filename: str
    message: str
    row_index: int | None = None
    category: str | None = None

    @classmethod
    def from_diagnostic(cls, diagnostic: AggregationDiagnostic) -> "DiagnosticResponse":
        return cls(
            code=diagnostic.code,
            filename=diagnostic.filename,
            message=diagnostic.message,
            row_index=diagnostic.row_index,
            category=diagnostic.category,
        )


class AggregationResponse(BaseModel):
    """
    API response model for a reconciled batch.
    """

    files: list[FileStatusResponse] = Field(default_factory=list)
    summary: list[CategorySummaryResponse] = Field(default_factory=list)
    totals: BucketResponse
    diagnostics: list[DiagnosticResponse] = Field(default_factory=list)


def summary_rows(summary: AggregatedSummary) -> list[CategorySummaryResponse]:
    """
    Render the summary in canonical order.
    """

    return [
        CategorySummaryResponse(
            position=position,
            category=category,
            inspected=bucket.inspected,
            compliant=bucket.compliant,
            with_smoking_room=bucket.with_smoking_room,
        )
        for position, (category, bucket) in enumerate(summary.items(), start=1)
    ]


class HealthResponse(BaseModel):
    """
    API response model for the health check.
    """

    status: Literal["ok"] = "ok"
    categories: int = Field(..., ge=1)
