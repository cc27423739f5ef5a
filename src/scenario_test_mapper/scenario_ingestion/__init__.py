"""Scenario ingestion exports."""

from .record_parsing import (
    ScenarioLoadError,
    build_candidate_test,
    build_scenario,
    normalize_priority,
    normalize_risk_level,
)
from .scenario_reader import (
    load_api_inventory,
    load_candidate_tests,
    load_scenarios,
    load_suggested_scenarios,
)
from .workbook_reader import SCENARIO_COLUMNS, SCENARIO_SHEET_NAME, read_scenario_rows

__all__ = [
    "SCENARIO_COLUMNS",
    "SCENARIO_SHEET_NAME",
    "ScenarioLoadError",
    "build_candidate_test",
    "build_scenario",
    "load_api_inventory",
    "load_candidate_tests",
    "load_scenarios",
    "load_suggested_scenarios",
    "normalize_priority",
    "normalize_risk_level",
    "read_scenario_rows",
]
