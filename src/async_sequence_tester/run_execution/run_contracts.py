"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from async_sequence_tester.configuration.runtime_settings import Configuration
from async_sequence_tester.scenario_ingestion.scenario_models import SequenceScenario


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one run."""

    scenario_paths: tuple[str, ...]
    config_path: str | None = None
    output_dir: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    output_path: Path
    passed: int
    failed: int
    errored: int
    skipped: int

    @property
    def succeeded(self) -> bool:
        """Return True when no scenario failed or errored."""
        return self.failed == 0 and self.errored == 0


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded domain artifacts required during run execution."""

    configuration: Configuration
    scenarios: tuple[SequenceScenario, ...]
