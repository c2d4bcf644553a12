"""
inspection_report/services package marker.
"""

from inspection_report.services.aggregation_service import DataWindow, FacilityAggregator
from inspection_report.services.export_service import SummaryExporter, export_filename
from inspection_report.services.report_batch_service import (
    FileOutcome,
    ReportBatchService,
    UploadedReport,
    get_report_batch_service,
)

__all__ = [
    "DataWindow",
    "FacilityAggregator",
    "FileOutcome",
    "ReportBatchService",
    "SummaryExporter",
    "UploadedReport",
    "export_filename",
    "get_report_batch_service",
]
