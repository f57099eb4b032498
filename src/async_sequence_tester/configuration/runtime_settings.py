"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from async_sequence_tester.matching_validation import DEFAULT_MAX_RENDERED_LENGTH

DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class ValidationSettings:
    """Settings applied to every validation pass."""

    max_rendered_length: int = DEFAULT_MAX_RENDERED_LENGTH
    yield_between_elements: bool = True


@dataclass(frozen=True)
class ReportingSettings:
    """Where run results are written."""

    output_dir: Path | None = None


@dataclass(frozen=True)
class LoggingSettings:
    """Log level applied by the command line interface."""

    level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    validation: ValidationSettings = field(default_factory=ValidationSettings)
    reporting: ReportingSettings = field(default_factory=ReportingSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
