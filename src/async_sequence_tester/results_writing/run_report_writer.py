"""Results workbook writer service."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from .report_models import RunMetadata, ScenarioResult, ScenarioStatus

RESULTS_SHEET_NAME = "Results"
RUN_INFO_SHEET_NAME = "RunInfo"
RESULT_COLUMNS = (
    "File",
    "ID",
    "Tags",
    "Status",
    "Failure",
    "Index",
    "Expected",
    "Actual",
    "Message",
    "Position",
    "Consumed",
)
_WIDE_COLUMNS = frozenset({"Expected", "Actual", "Message"})


def write_results_workbook(
    output_path: Path | str,
    results: Sequence[ScenarioResult],
    run_metadata: RunMetadata,
) -> None:
    """Write the run output workbook with Results and RunInfo sheets."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = RESULTS_SHEET_NAME
    _write_result_headers(sheet)
    for row_number, result in enumerate(results, start=2):
        _write_result_row(sheet, row_number, result)
    sheet.freeze_panes = "A2"

    _write_run_info_sheet(workbook, run_metadata, results)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)


def _write_result_headers(sheet) -> None:
    for column, header in enumerate(RESULT_COLUMNS, start=1):
        cell = sheet.cell(row=1, column=column, value=header)
        cell.style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column)].width = (
            50 if header in _WIDE_COLUMNS else max(12, len(header) + 6)
        )


def _write_result_row(sheet, row_number: int, result: ScenarioResult) -> None:
    values = (
        result.source_path.name,
        result.scenario_id,
        ", ".join(result.tags),
        result.status.value,
        result.failure_kind,
        result.expectation_index,
        result.expected,
        result.actual,
        result.message,
        result.position,
        result.elements_consumed,
    )
    for column, value in enumerate(values, start=1):
        sheet.cell(row=row_number, column=column, value=value)


def _write_run_info_sheet(
    workbook, run_metadata: RunMetadata, results: Sequence[ScenarioResult]
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    counts = Counter(result.status for result in results)
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("scenario_paths", "\n".join(str(path) for path in run_metadata.scenario_paths)),
        ("output_path", str(run_metadata.output_path)),
        ("config_path", str(run_metadata.config_path) if run_metadata.config_path else ""),
        ("max_rendered_length", run_metadata.max_rendered_length),
        ("total", len(results)),
        ("passed", counts[ScenarioStatus.PASSED]),
        ("failed", counts[ScenarioStatus.FAILED]),
        ("errored", counts[ScenarioStatus.ERRORED]),
        ("skipped", counts[ScenarioStatus.SKIPPED]),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
