"""
inspection_report/api/routers/inspection_reports.py

Inspection report reconciliation endpoints.

POST /inspection-reports/aggregate
    Multipart ``files``; returns per-file statuses, the summary in canonical
    order, grand totals and aggregation diagnostics.

POST /inspection-reports/export?period_label=...
    Same input; returns the report workbook as
    ``summary_<YYYY-MM-DD>.xlsx``.

Error mapping
-------------
400 - more files than allowed in one batch
422 - no file passed validation (per-file statuses in the detail)
500 - the report workbook could not be produced

All reconciliation logic lives in ReportBatchService; the router only
handles HTTP plumbing.
"""

from __future__ import annotations

import io
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from inspection_report.api.dependencies import get_report_uploads
from inspection_report.domain.errors import NoValidFilesError, TooManyFilesError
from inspection_report.domain.facility_report import AggregationReport
from inspection_report.schemas.facility_report import (
    AggregationResponse,
    BucketResponse,
    DiagnosticResponse,
    FileStatusResponse,
    summary_rows,
)
from inspection_report.services.export_service import XLSX_MEDIA_TYPE, export_filename
from inspection_report.services.report_batch_service import (
    FileOutcome,
    ReportBatchService,
    UploadedReport,
    get_report_batch_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inspection-reports", tags=["inspection-reports"])


def _reconcile(
    service: ReportBatchService,
    uploads: list[UploadedReport],
) -> tuple[list[FileOutcome], AggregationReport]:
    try:
        outcomes = service.process_batch(uploads)
    except TooManyFilesError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc

    try:
        report = service.aggregate(outcomes)
    except NoValidFilesError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": str(exc),
                "files": [
                    FileStatusResponse.from_outcome(outcome).model_dump(mode="json")
                    for outcome in outcomes
                ],
            },
        ) from exc

    return outcomes, report


@router.post("/aggregate", response_model=AggregationResponse)
def aggregate_reports(
    uploads: list[UploadedReport] = Depends(get_report_uploads),
    service: ReportBatchService = Depends(get_report_batch_service),
) -> AggregationResponse:
    """
    Validate every uploaded report and aggregate the valid ones.
    """

    outcomes, report = _reconcile(service, uploads)
    return AggregationResponse(
        files=[FileStatusResponse.from_outcome(outcome) for outcome in outcomes],
        summary=summary_rows(report.summary),
        totals=BucketResponse.from_bucket(report.summary.totals()),
        diagnostics=[DiagnosticResponse.from_diagnostic(item) for item in report.diagnostics],
    )


@router.post("/export")
def export_reports(
    period_label: str = Query(..., min_length=1, description="Reporting period shown in the subtitle, e.g. 'sierpień 2025'"),
    uploads: list[UploadedReport] = Depends(get_report_uploads),
    service: ReportBatchService = Depends(get_report_batch_service),
) -> Response:
    """
    Aggregate the uploaded reports and return the formatted summary workbook.
    """

    _, report = _reconcile(service, uploads)

    buffer = io.BytesIO()
    if not service.exporter.write(report.summary, period_label, buffer):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to generate the summary workbook.",
        )

    filename = export_filename()
    logger.info("Summary workbook generated filename=%s files=%d", filename, len(report.accepted_files))
    return Response(
        content=buffer.getvalue(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
