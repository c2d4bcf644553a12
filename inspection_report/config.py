"""
inspection_report/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_MAX_FILES = 10
DEFAULT_MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024
DEFAULT_ALLOWED_EXTENSIONS: tuple[str, ...] = (".xlsx", ".xls")


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_extensions_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated extension list, normalised to lower-case `.ext`.
    """

    raw_value = _get_str_env(name, "")
    if not raw_value:
        return default
    extensions = []
    for item in raw_value.split(","):
        ext = item.strip().lower()
        if not ext:
            continue
        extensions.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(extensions) or default


@dataclass(frozen=True)
class ReportSettings:
    """
    Runtime settings for inspection report ingestion and export.

    ``header_row_index`` is the 0-based sheet row holding the column headers.
    The data window bounds are inclusive 0-based sheet rows agreed with the
    report producers.
    """

    max_files: int = DEFAULT_MAX_FILES
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    header_row_index: int = 4
    data_window_start: int = 6
    data_window_end: int = 15
    region_name: str = "zachodniopomorskim"
    export_dir: str = "exports"


@lru_cache(maxsize=1)
def get_report_settings() -> ReportSettings:
    """
    Return cached report settings from environment variables.
    """

    window_start = max(0, _get_int_env("REPORT_DATA_WINDOW_START", 6))
    window_end = max(window_start, _get_int_env("REPORT_DATA_WINDOW_END", 15))
    return ReportSettings(
        max_files=max(1, _get_int_env("REPORT_MAX_FILES", DEFAULT_MAX_FILES)),
        max_file_size_bytes=max(1, _get_int_env("REPORT_MAX_FILE_SIZE_BYTES", DEFAULT_MAX_FILE_SIZE_BYTES)),
        allowed_extensions=_get_extensions_env("REPORT_ALLOWED_EXTENSIONS", DEFAULT_ALLOWED_EXTENSIONS),
        header_row_index=max(0, _get_int_env("REPORT_HEADER_ROW_INDEX", 4)),
        data_window_start=window_start,
        data_window_end=window_end,
        region_name=_get_str_env("REPORT_REGION_NAME", "zachodniopomorskim"),
        export_dir=_get_str_env("REPORT_EXPORT_DIR", "exports"),
    )
