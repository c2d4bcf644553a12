"""
inspection_report/validators package marker.
"""

from inspection_report.validators.row_validator import (
    FIELD_SOURCES,
    InspectionRowValidator,
    coerce_count,
    resolve_field,
)
from inspection_report.validators.upload_validator import validate_batch_size, validate_upload

__all__ = [
    "FIELD_SOURCES",
    "InspectionRowValidator",
    "coerce_count",
    "resolve_field",
    "validate_batch_size",
    "validate_upload",
]
