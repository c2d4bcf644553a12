"""
inspection_report/schemas package marker.
"""

from inspection_report.schemas.facility_report import (
    AggregationResponse,
    BucketResponse,
    CategorySummaryResponse,
    DiagnosticResponse,
    FileStatusResponse,
    HealthResponse,
    summary_rows,
)

__all__ = [
    "AggregationResponse",
    "BucketResponse",
    "CategorySummaryResponse",
    "DiagnosticResponse",
    "FileStatusResponse",
    "HealthResponse",
    "summary_rows",
]
