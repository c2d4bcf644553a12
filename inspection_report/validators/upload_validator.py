"""
inspection_report/validators/upload_validator.py

Checks applied to uploaded files before their content is parsed.
"""

from __future__ import annotations

from inspection_report.config import ReportSettings
from inspection_report.domain.errors import FileSizeError, FileTypeError, TooManyFilesError


def validate_upload(filename: str, size: int, *, settings: ReportSettings) -> None:
    """
    Reject files with a wrong extension or above the size limit.

    A file exactly at the limit is accepted.
    """

    normalized = (filename or "").strip().lower()
    if not any(normalized.endswith(ext) for ext in settings.allowed_extensions):
        allowed = ", ".join(settings.allowed_extensions)
        raise FileTypeError(
            f"Invalid file format. Allowed: {allowed}.",
            filename=filename,
        )

    if size > settings.max_file_size_bytes:
        limit_mb = settings.max_file_size_bytes / (1024 * 1024)
        raise FileSizeError(
            f"File is too large (max. {limit_mb:g} MB).",
            filename=filename,
        )


def validate_batch_size(count: int, *, settings: ReportSettings) -> None:
    """
    Reject batches holding more files than allowed.
    """

    if count > settings.max_files:
        raise TooManyFilesError(submitted=count, limit=settings.max_files)
