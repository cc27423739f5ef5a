"""Results writing domain exports."""

from .coverage_report_writer import (
    COVERAGE_COLUMNS,
    COVERAGE_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    write_coverage_workbook,
    write_summary_json,
)
from .report_models import RunMetadata

__all__ = [
    "COVERAGE_COLUMNS",
    "COVERAGE_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "RunMetadata",
    "write_coverage_workbook",
    "write_summary_json",
]
