"""
Aggregate inspection report spreadsheets from the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from inspection_report.config import get_report_settings
from inspection_report.domain.errors import NoValidFilesError, TooManyFilesError, UnreadableFileError
from inspection_report.services.report_batch_service import FileOutcome, ReportBatchService
from inspection_report.validators.upload_validator import validate_batch_size

logger = logging.getLogger(__name__)


def _process_path(service: ReportBatchService, path: Path) -> FileOutcome:
    try:
        content = path.read_bytes()
    except OSError as exc:
        logger.warning("Report file could not be opened path=%s: %s", path, exc)
        error = UnreadableFileError(f"Could not open file: {exc.strerror or exc}", filename=path.name)
        return FileOutcome.failed(path.name, error)
    return service.process_file(path.name, content)


def main() -> int:
    parser = argparse.ArgumentParser(description="Reconcile inspection report spreadsheets into one summary.")
    parser.add_argument("paths", nargs="+", type=Path, help="Spreadsheet files submitted by inspectors.")
    parser.add_argument(
        "--period",
        dest="period",
        default=None,
        help="Reporting period for the report subtitle, e.g. 'sierpień 2025'.",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        type=Path,
        default=None,
        help="Directory for summary_<date>.xlsx (default: REPORT_EXPORT_DIR). Requires --period.",
    )
    args = parser.parse_args()

    if args.output_dir is not None and not args.period:
        parser.error("--output-dir requires --period")

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s [%(name)s] %(message)s")

    settings = get_report_settings()
    service = ReportBatchService(settings=settings)
    try:
        validate_batch_size(len(args.paths), settings=settings)
    except TooManyFilesError as exc:
        parser.error(str(exc))

    outcomes = [_process_path(service, path) for path in args.paths]

    payload: dict[str, object] = {
        "files": [
            {
                "filename": outcome.filename,
                "status": outcome.status,
                "rows": outcome.row_count,
                "error": outcome.error.to_dict() if outcome.error is not None else None,
            }
            for outcome in outcomes
        ],
    }

    try:
        report = service.aggregate(outcomes)
    except NoValidFilesError as exc:
        payload["error"] = str(exc)
        print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))
        return 1

    payload["summary"] = report.summary.as_dict()
    payload["totals"] = report.summary.totals().as_dict()
    payload["diagnostics"] = [
        {
            "code": item.code,
            "filename": item.filename,
            "row_index": item.row_index,
            "message": item.message,
        }
        for item in report.diagnostics
    ]

    exit_code = 0
    if args.period:
        output_dir = args.output_dir or Path(settings.export_dir)
        exported = service.exporter.export(report.summary, args.period, output_dir)
        payload["exported"] = exported
        exit_code = 0 if exported else 2

    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
