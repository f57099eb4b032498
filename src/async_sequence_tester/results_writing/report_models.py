"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class ScenarioStatus(str, Enum):
    """Rendered status in the output workbook status column."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    ERRORED = "ERRORED"
    SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class ScenarioResult:  # pylint: disable=too-many-instance-attributes
    """Outcome of one scenario, flattened for rendering."""

    source_path: Path
    scenario_id: str
    tags: tuple[str, ...]
    status: ScenarioStatus
    failure_kind: str = ""
    expectation_index: int | None = None
    expected: str = ""
    actual: str = ""
    message: str = ""
    position: str = ""
    elements_consumed: int = 0


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    scenario_paths: tuple[Path, ...]
    output_path: Path
    config_path: Path | None
    max_rendered_length: int
