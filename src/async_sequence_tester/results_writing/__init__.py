"""Results writing domain exports."""

from .report_models import RunMetadata, ScenarioResult, ScenarioStatus
from .run_report_writer import (
    RESULT_COLUMNS,
    RESULTS_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    write_results_workbook,
)

__all__ = [
    "RESULT_COLUMNS",
    "RESULTS_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "RunMetadata",
    "ScenarioResult",
    "ScenarioStatus",
    "write_results_workbook",
]
