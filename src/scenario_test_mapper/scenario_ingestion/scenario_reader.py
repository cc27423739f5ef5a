"""Scenario, candidate test and API inventory loaders."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from scenario_test_mapper.gap_analysis import ApiEndpoint
from scenario_test_mapper.matching_strategies import CandidateTest, Scenario

from .record_parsing import (
    ScenarioLoadError,
    build_candidate_test,
    build_scenario,
    validate_scenarios,
)
from .workbook_reader import read_scenario_rows

LOGGER = logging.getLogger(__name__)

_STRUCTURED_SUFFIXES = frozenset({".yaml", ".yml", ".json"})
_WORKBOOK_SUFFIXES = frozenset({".xlsx"})
SUGGESTED_ID_PREFIX = "AI-"


def load_scenarios(scenarios_path: Path | str) -> list[Scenario]:
    """Load and validate the baseline scenario set from YAML, JSON or XLSX."""
    path = Path(scenarios_path)
    records = _read_scenario_records(path)
    scenarios = [build_scenario(record) for record in records]
    validate_scenarios(scenarios, str(path))
    LOGGER.info("Loaded %d scenario(s) from %s", len(scenarios), path)
    return scenarios


def load_suggested_scenarios(scenarios_path: Path | str) -> list[Scenario]:
    """Load a supplementary scenario set; records without an id get ``AI-<n>``."""
    path = Path(scenarios_path)
    records = _read_scenario_records(path)
    scenarios = [
        build_scenario(record, fallback_id=f"{SUGGESTED_ID_PREFIX}{index}")
        for index, record in enumerate(records, start=1)
    ]
    validate_scenarios(scenarios, str(path))
    LOGGER.info("Loaded %d suggested scenario(s) from %s", len(scenarios), path)
    return scenarios


def load_candidate_tests(tests_path: Path | str) -> list[CandidateTest]:
    """Load the candidate test pool from a YAML/JSON list or ``{tests: [...]}`` mapping."""
    path = Path(tests_path)
    records = _records_from(_read_structured(path), "tests", path)
    tests = [build_candidate_test(record, index) for index, record in enumerate(records)]
    LOGGER.info("Loaded %d candidate test(s) from %s", len(tests), path)
    return tests


def load_api_inventory(apis_path: Path | str) -> list[ApiEndpoint]:
    """Load the externally supplied API inventory of ``{endpoint, method}`` records."""
    path = Path(apis_path)
    records = _records_from(_read_structured(path), "apis", path)
    apis: list[ApiEndpoint] = []
    for index, record in enumerate(records):
        endpoint = str(record.get("endpoint") or record.get("path") or "").strip()
        if not endpoint:
            raise ScenarioLoadError(f"API at index {index} in {path} requires an endpoint.")
        method = str(record.get("method") or "").strip().upper() or None
        apis.append(ApiEndpoint(endpoint=endpoint, method=method))
    LOGGER.info("Loaded %d API endpoint(s) from %s", len(apis), path)
    return apis


def _read_scenario_records(path: Path) -> list[Mapping[str, Any]]:
    suffix = path.suffix.lower()
    if suffix in _WORKBOOK_SUFFIXES:
        return list(read_scenario_rows(path))
    if suffix in _STRUCTURED_SUFFIXES:
        return _records_from(_read_structured(path), "scenarios", path)
    raise ScenarioLoadError(f"Unsupported scenario file format: {path.suffix or path.name}")


def _read_structured(path: Path) -> Any:
    if not path.exists():
        raise ScenarioLoadError(f"Input file not found: {path}")
    if path.suffix.lower() not in _STRUCTURED_SUFFIXES:
        raise ScenarioLoadError(f"Unsupported file format: {path.suffix or path.name}")
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ScenarioLoadError(f"Failed to parse {path}: {exc}") from exc


def _records_from(parsed: Any, key: str, path: Path) -> list[Mapping[str, Any]]:
    if isinstance(parsed, Mapping):
        parsed = parsed.get(key)
    if parsed is None:
        return []
    if not isinstance(parsed, list):
        raise ScenarioLoadError(f"{path} must contain a list of records or a '{key}' list.")
    for index, record in enumerate(parsed):
        if not isinstance(record, Mapping):
            raise ScenarioLoadError(f"Record at index {index} in {path} must be a mapping.")
    return parsed
