"""
tests/test_aggregate_reports.py

Pytest tests for the ``scripts/aggregate_reports.py`` command line entry point.

Report files are written to tmp_path; ``main()`` runs with a patched
``sys.argv`` and its JSON output is read back from stdout.

Coverage
--------
- Exit code 0 with summary and totals
- Exit code 1 when no file is valid
- Exit code 2 when the export cannot be written
- A missing path is reported per file and does not stop the others
- Export into --output-dir
"""

from __future__ import annotations

import importlib.util
import json
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "aggregate_reports.py"


@pytest.fixture(scope="module")
def cli() -> ModuleType:
    module_spec = importlib.util.spec_from_file_location("aggregate_reports", SCRIPT_PATH)
    assert module_spec is not None and module_spec.loader is not None
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


@pytest.fixture()
def good_path(tmp_path: Path, uniform_report: bytes) -> Path:
    path = tmp_path / "good.xlsx"
    path.write_bytes(uniform_report)
    return path


def _run(
    cli: ModuleType,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    *args: str,
) -> tuple[int, dict[str, Any]]:
    monkeypatch.setattr(sys, "argv", ["aggregate_reports.py", *args])
    exit_code = cli.main()
    return exit_code, json.loads(capsys.readouterr().out)


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class TestExitCodes:
    def test_success_prints_summary(
        self,
        cli: ModuleType,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        good_path: Path,
    ) -> None:
        exit_code, payload = _run(cli, monkeypatch, capsys, str(good_path))

        assert exit_code == 0
        assert payload["files"][0]["status"] == "success"
        assert payload["totals"] == {"inspected": 10, "compliant": 20, "with_smoking_room": 30}
        assert payload["summary"]["uczelnie wyższe"] == {"inspected": 1, "compliant": 2, "with_smoking_room": 3}
        assert "exported" not in payload

    def test_no_valid_file_exits_1(
        self,
        cli: ModuleType,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        tmp_path: Path,
    ) -> None:
        notes = tmp_path / "notes.pdf"
        notes.write_bytes(b"%PDF-1.4")

        exit_code, payload = _run(cli, monkeypatch, capsys, str(notes))

        assert exit_code == 1
        assert payload["error"] == "No valid files to aggregate."
        assert payload["files"][0]["error"]["code"] == "invalid_file_type"
        assert "summary" not in payload

    def test_failed_export_exits_2(
        self,
        cli: ModuleType,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        tmp_path: Path,
        good_path: Path,
    ) -> None:
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x", encoding="utf-8")

        exit_code, payload = _run(
            cli, monkeypatch, capsys, str(good_path), "--period", "sierpień 2025", "--output-dir", str(blocker)
        )

        assert exit_code == 2
        assert payload["exported"] is False
        assert payload["totals"]["inspected"] == 10


# ---------------------------------------------------------------------------
# Per-file handling and export
# ---------------------------------------------------------------------------


class TestBatch:
    def test_missing_path_does_not_stop_the_others(
        self,
        cli: ModuleType,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        tmp_path: Path,
        good_path: Path,
    ) -> None:
        missing = tmp_path / "missing.xlsx"

        exit_code, payload = _run(cli, monkeypatch, capsys, str(good_path), str(missing))

        assert exit_code == 0
        assert [item["status"] for item in payload["files"]] == ["success", "error"]
        assert payload["files"][1]["filename"] == "missing.xlsx"
        assert payload["files"][1]["error"]["code"] == "processing_error"
        assert payload["totals"]["inspected"] == 10

    def test_directory_path_is_reported_per_file(
        self,
        cli: ModuleType,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        tmp_path: Path,
        good_path: Path,
    ) -> None:
        folder = tmp_path / "folder.xlsx"
        folder.mkdir()

        exit_code, payload = _run(cli, monkeypatch, capsys, str(folder), str(good_path))

        assert exit_code == 0
        assert [item["status"] for item in payload["files"]] == ["error", "success"]

    def test_export_writes_into_output_dir(
        self,
        cli: ModuleType,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        tmp_path: Path,
        good_path: Path,
    ) -> None:
        out_dir = tmp_path / "exports"

        exit_code, payload = _run(
            cli, monkeypatch, capsys, str(good_path), "--period", "sierpień 2025", "--output-dir", str(out_dir)
        )

        assert exit_code == 0
        assert payload["exported"] is True
        assert [path.name for path in out_dir.iterdir()][0].startswith("summary_")
