"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ExportConfig:
    """Artifact export configuration."""

    output_dir: str = "."
    formats: tuple[str, ...] = ("raw", "dot")


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"  # "json" or "console"


@dataclass
class RbiamConfig:
    """Top-level rbiam configuration."""

    export: ExportConfig = field(default_factory=ExportConfig)
    log: LogConfig = field(default_factory=LogConfig)
