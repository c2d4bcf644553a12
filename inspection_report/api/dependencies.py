"""
inspection_report/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import File, HTTPException, UploadFile, status

from inspection_report.services.report_batch_service import UploadedReport


def get_report_uploads(files: list[UploadFile] = File(...)) -> list[UploadedReport]:
    """
    Read every uploaded report fully into memory.

    Extension and size checks happen per file in the batch service so one
    bad file does not reject the request.
    """

    if not files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one file is required.",
        )

    uploads: list[UploadedReport] = []
    for upload in files:
        try:
            content = upload.file.read()
        finally:
            upload.file.close()
        uploads.append(UploadedReport(filename=(upload.filename or "").strip(), content=content))
    return uploads
