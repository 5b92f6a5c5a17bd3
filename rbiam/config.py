"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from rbiam.models.config import ExportConfig, LogConfig, RbiamConfig

_VALID_FORMATS = ("raw", "dot")
_LOG_FORMATS = ("json", "console")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"RBIAM_{key}", default)


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    if value.lower() not in _LOG_FORMATS:
        raise ValueError(f"Invalid log format: {value}. Must be one of {_LOG_FORMATS}")
    return value.lower()


def _validate_formats(value: str) -> tuple[str, ...]:
    formats = tuple(f.strip().lower() for f in value.split(",") if f.strip())
    if not formats:
        raise ValueError("At least one export format is required")
    for fmt in formats:
        if fmt not in _VALID_FORMATS:
            raise ValueError(f"Invalid export format: {fmt}. Must be one of {_VALID_FORMATS}")
    return formats


def load_config() -> RbiamConfig:
    """Load configuration from RBIAM_* environment variables."""
    return RbiamConfig(
        export=ExportConfig(
            output_dir=_env("OUTPUT_DIR", "."),
            formats=_validate_formats(_env("EXPORT_FORMATS", "raw,dot")),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
