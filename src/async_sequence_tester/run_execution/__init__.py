"""Run execution use-case exports."""

from .run_contracts import RunArtifacts, RunOutcome, RunRequest
from .scenario_run_use_case import RunExecutionError, execute_scenario_run

__all__ = [
    "RunArtifacts",
    "RunOutcome",
    "RunRequest",
    "RunExecutionError",
    "execute_scenario_run",
]
