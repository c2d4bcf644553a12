"""
inspection_report/services/report_batch_service.py

Service layer for batch report reconciliation.

Each submitted file moves independently through

    upload checks -> workbook reader -> row validator

and ends as a ``FileOutcome``: either ``success`` with its validated rows or
``error`` with the typed ``ReportFileError`` that rejected it. One rejected
file never stops the others. Only successful outcomes reach the aggregator,
and aggregating a batch without any of them fails explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Literal, Sequence

from inspection_report.config import ReportSettings, get_report_settings
from inspection_report.domain.categories import DEFAULT_SCHEMA
from inspection_report.domain.errors import NoValidFilesError, ReportFileError
from inspection_report.domain.facility_report import (
    AggregationDiagnostic,
    AggregationReport,
    SourceFile,
    ValidatedFile,
)
from inspection_report.readers.workbook_reader import read_workbook
from inspection_report.services.aggregation_service import DataWindow, FacilityAggregator
from inspection_report.services.export_service import SummaryExporter
from inspection_report.validators.row_validator import InspectionRowValidator
from inspection_report.validators.upload_validator import validate_batch_size, validate_upload

logger = logging.getLogger(__name__)

WorkbookReader = Callable[..., SourceFile]


@dataclass(frozen=True)
class UploadedReport:
    """
    One submitted file as received from the upload boundary.
    """

    filename: str
    content: bytes


@dataclass(frozen=True)
class FileOutcome:
    """
    Result of processing one file: success with rows, or a typed error.
    """

    filename: str
    status: Literal["success", "error"]
    validated: ValidatedFile | None = None
    error: ReportFileError | None = None

    @classmethod
    def succeeded(cls, validated: ValidatedFile) -> "FileOutcome":
        return cls(filename=validated.filename, status="success", validated=validated)

    @classmethod
    def failed(cls, filename: str, error: ReportFileError) -> "FileOutcome":
        return cls(filename=filename, status="error", error=error)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def row_count(self) -> int:
        return len(self.validated.rows) if self.validated is not None else 0


class ReportBatchService:
    """
    Coordinates upload checks, reading, validation, aggregation and export.
    """

    def __init__(
        self,
        *,
        settings: ReportSettings | None = None,
        reader: WorkbookReader = read_workbook,
        validator: InspectionRowValidator | None = None,
        aggregator: FacilityAggregator | None = None,
        exporter: SummaryExporter | None = None,
    ) -> None:
        self._settings = settings or ReportSettings()
        self._reader = reader
        self._validator = validator or InspectionRowValidator()
        self._aggregator = aggregator or FacilityAggregator(
            schema=DEFAULT_SCHEMA,
            data_window=DataWindow(
                start=self._settings.data_window_start,
                end=self._settings.data_window_end,
            ),
        )
        self._exporter = exporter or SummaryExporter(
            schema=self._aggregator.schema,
            region_name=self._settings.region_name,
        )

    @property
    def settings(self) -> ReportSettings:
        return self._settings

    @property
    def exporter(self) -> SummaryExporter:
        return self._exporter

    def process_file(self, filename: str, content: bytes) -> FileOutcome:
        """
        Run one file through upload checks, the reader and the validator.
        """

        try:
            validate_upload(filename, len(content), settings=self._settings)
            source_file = self._reader(
                filename,
                content,
                header_row_index=self._settings.header_row_index,
            )
            validated = self._validator.validate_file(source_file)
        except ReportFileError as exc:
            if exc.filename is None:
                exc.filename = filename
            logger.warning(
                "Report file rejected filename=%r code=%s message=%s",
                filename,
                exc.code,
                exc.message,
            )
            return FileOutcome.failed(filename, exc)

        logger.info("Report file accepted filename=%r rows=%d", filename, len(validated.rows))
        return FileOutcome.succeeded(validated)

    def process_batch(self, uploads: Sequence[UploadedReport]) -> list[FileOutcome]:
        """
        Process every upload independently.

        Raises
        ------
        TooManyFilesError: The batch exceeds ``max_files``; nothing is processed.
        """

        validate_batch_size(len(uploads), settings=self._settings)
        return [self.process_file(upload.filename, upload.content) for upload in uploads]

    def aggregate(self, outcomes: Sequence[FileOutcome]) -> AggregationReport:
        """
        Aggregate the successful outcomes of a batch.

        Raises
        ------
        NoValidFilesError: None of the outcomes succeeded.
        """

        validated_files = [
            outcome.validated
            for outcome in outcomes
            if outcome.ok and outcome.validated is not None
        ]
        if not validated_files:
            raise NoValidFilesError()

        diagnostics: list[AggregationDiagnostic] = []
        summary = self._aggregator.aggregate(validated_files, diagnostics=diagnostics)
        return AggregationReport(
            summary=summary,
            accepted_files=tuple(validated.filename for validated in validated_files),
            diagnostics=tuple(diagnostics),
        )


@lru_cache(maxsize=1)
def get_report_batch_service() -> ReportBatchService:
    """
    Build and cache the batch service with env-driven settings.
    """

    return ReportBatchService(settings=get_report_settings())
