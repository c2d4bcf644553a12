"""
inspection_report/domain/errors.py

Error taxonomy for report file processing.

Per-file errors derive from ``ReportFileError``; a batch keeps going when one
file raises one of them. Batch-level errors stop the whole request.
"""

from __future__ import annotations

from typing import Any, Sequence

from inspection_report.domain.facility_report import RowValidationError


class ReportFileError(ValueError):
    """
    Base class for errors that reject a single uploaded file.
    """

    code = "processing_error"

    def __init__(self, message: str, *, filename: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.filename = filename

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "filename": self.filename,
        }


class FileTypeError(ReportFileError):
    """
    Raised when the file extension is not an accepted spreadsheet format.
    """

    code = "invalid_file_type"


class FileSizeError(ReportFileError):
    """
    Raised when the file exceeds the configured maximum size.
    """

    code = "file_too_large"


class EmptyFileError(ReportFileError):
    """
    Raised when no data rows survive header/footer filtering.
    """

    code = "no_data"


class UnreadableFileError(ReportFileError):
    """
    Raised when the bytes cannot be parsed as a workbook.
    """

    code = "processing_error"


class ValidationError(ReportFileError):
    """
    Raised when one or more rows fail structural validation.

    ``row_index``, ``field`` and ``message`` describe the first failure;
    ``errors`` holds every collected row error.
    """

    code = "invalid_data_format"

    def __init__(
        self,
        *,
        errors: Sequence[RowValidationError],
        filename: str | None = None,
    ) -> None:
        if not errors:
            raise ValueError("ValidationError requires at least one row error.")
        first = errors[0]
        location = f"row {first.row_index}" if first.row_index is not None else "row"
        super().__init__(
            f"{location}, field '{first.field}': {first.message}",
            filename=filename,
        )
        self.errors = tuple(errors)
        self.row_index = first.row_index
        self.field = first.field

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["errors"] = [
            {
                "row_index": error.row_index,
                "field": error.field,
                "message": error.message,
                "value": error.value,
            }
            for error in self.errors
        ]
        return payload


class ExportError(RuntimeError):
    """
    Raised inside the exporter when the report workbook cannot be produced.
    """

    code = "export_failed"


class TooManyFilesError(ValueError):
    """
    Raised when a batch holds more files than allowed.
    """

    code = "too_many_files"

    def __init__(self, *, submitted: int, limit: int) -> None:
        super().__init__(f"At most {limit} files can be submitted at once (got {submitted}).")
        self.submitted = submitted
        self.limit = limit

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": str(self),
            "submitted": self.submitted,
            "limit": self.limit,
        }


class NoValidFilesError(ValueError):
    """
    Raised when aggregation is requested without any successfully validated file.
    """

    def __init__(self, message: str = "No valid files to aggregate.") -> None:
        super().__init__(message)
