"""
inspection_report/domain package marker.
"""

from inspection_report.domain.categories import DEFAULT_SCHEMA, FACILITY_CATEGORIES, CategorySchema
from inspection_report.domain.errors import (
    EmptyFileError,
    ExportError,
    FileSizeError,
    FileTypeError,
    NoValidFilesError,
    ReportFileError,
    TooManyFilesError,
    UnreadableFileError,
    ValidationError,
)
from inspection_report.domain.facility_report import (
    AggregatedSummary,
    AggregationDiagnostic,
    AggregationReport,
    Bucket,
    RawRow,
    RowValidationError,
    SourceFile,
    ValidatedFile,
    ValidatedRow,
)

__all__ = [
    "AggregatedSummary",
    "AggregationDiagnostic",
    "AggregationReport",
    "Bucket",
    "CategorySchema",
    "DEFAULT_SCHEMA",
    "EmptyFileError",
    "ExportError",
    "FACILITY_CATEGORIES",
    "FileSizeError",
    "FileTypeError",
    "NoValidFilesError",
    "RawRow",
    "ReportFileError",
    "RowValidationError",
    "SourceFile",
    "TooManyFilesError",
    "UnreadableFileError",
    "ValidatedFile",
    "ValidatedRow",
    "ValidationError",
]
