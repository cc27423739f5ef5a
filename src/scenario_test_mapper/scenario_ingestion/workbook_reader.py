"""Scenario workbook ingestion."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from .record_parsing import ScenarioLoadError, split_list

SCENARIO_SHEET_NAME = "Scenarios"
SCENARIO_COLUMNS: tuple[str, ...] = (
    "ID",
    "Description",
    "API Endpoint",
    "HTTP Method",
    "Category",
    "Priority",
    "Risk Level",
    "Tags",
    "Acceptance Criteria",
    "Regex Rules",
)
_REQUIRED_COLUMNS = ("ID", "Description")
_FIELD_BY_COLUMN: Mapping[str, str] = {
    "ID": "id",
    "Description": "description",
    "API Endpoint": "apiEndpoint",
    "HTTP Method": "httpMethod",
    "Category": "category",
    "Priority": "priority",
    "Risk Level": "riskLevel",
    "Tags": "tags",
    "Acceptance Criteria": "acceptanceCriteria",
}


def read_scenario_rows(workbook_path: Path | str) -> list[dict[str, Any]]:
    """Read the scenario sheet and return one raw record per non-empty row."""
    path = Path(workbook_path)
    if not path.exists():
        raise ScenarioLoadError(f"Scenario workbook not found: {path}")

    workbook = load_workbook(path, data_only=True, read_only=False)
    sheet = (
        workbook[SCENARIO_SHEET_NAME]
        if SCENARIO_SHEET_NAME in workbook.sheetnames
        else workbook.active
    )
    if sheet is None:
        raise ScenarioLoadError("Scenario workbook has no active sheet.")
    assert isinstance(sheet, Worksheet)

    header_map = _read_header_map(sheet)
    records: list[dict[str, Any]] = []
    for row_idx in range(2, sheet.max_row + 1):
        row_data = {
            name: sheet.cell(row=row_idx, column=col_index).value
            for name, col_index in header_map.items()
        }
        if _row_is_empty(row_data):
            continue
        records.append(_to_record(row_data))
    return records


def _read_header_map(sheet: Worksheet) -> dict[str, int]:
    header_map: dict[str, int] = {}
    for column in range(1, sheet.max_column + 1):
        value = sheet.cell(row=1, column=column).value
        if value is None:
            continue
        name = str(value).strip()
        if name in SCENARIO_COLUMNS:
            header_map[name] = column
    missing = [name for name in _REQUIRED_COLUMNS if name not in header_map]
    if missing:
        raise ScenarioLoadError(
            f"Scenario workbook is missing required column(s): {', '.join(missing)}."
        )
    return header_map


def _to_record(row_data: Mapping[str, object]) -> dict[str, Any]:
    record: dict[str, Any] = {
        field_name: row_data.get(column)
        for column, field_name in _FIELD_BY_COLUMN.items()
        if row_data.get(column) is not None
    }
    rules = split_list(row_data.get("Regex Rules"), separators="\n")
    if rules:
        record["matchingRules"] = [{"type": "regex", "pattern": rule} for rule in rules]
    return record


def _row_is_empty(row_data: Mapping[str, object]) -> bool:
    return all(value is None or str(value).strip() == "" for value in row_data.values())
