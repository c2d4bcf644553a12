"""
inspection_report/api/routers package marker.
"""

from inspection_report.api.routers.inspection_reports import router as inspection_reports_router

__all__ = [
    "inspection_reports_router",
]
