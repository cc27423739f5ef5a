"""Normalization of raw scenario and test records into matching entities."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from scenario_test_mapper.matching_strategies.matching_models import (
    CandidateTest,
    MatchingRule,
    Priority,
    RiskLevel,
    RuleKind,
    Scenario,
)

_DEFAULT_RULE_THRESHOLD = 0.7

_PRIORITY_PATTERNS: tuple[tuple[re.Pattern[str], Priority], ...] = (
    (re.compile(r"P0|CRITICAL|BLOCKER"), Priority.P0),
    (re.compile(r"P1|HIGH|MAJOR"), Priority.P1),
    (re.compile(r"P2|MEDIUM|NORMAL"), Priority.P2),
)
_RISK_PATTERNS: tuple[tuple[re.Pattern[str], RiskLevel], ...] = (
    (re.compile(r"critical|highest"), RiskLevel.CRITICAL),
    (re.compile(r"high|major"), RiskLevel.HIGH),
    (re.compile(r"medium|moderate"), RiskLevel.MEDIUM),
)

_ID_KEYS = ("id", "scenarioId", "scenario_id")
_ENDPOINT_KEYS = ("apiEndpoint", "api_endpoint", "api", "endpoint")
_METHOD_KEYS = ("httpMethod", "http_method", "method")
_RISK_KEYS = ("riskLevel", "risk_level", "risk")
_CRITERIA_KEYS = ("acceptanceCriteria", "acceptance_criteria")
_RULE_KEYS = ("matchingRules", "matching_rules")


class ScenarioLoadError(Exception):
    """Raised when scenario, test or API inventory input is invalid."""


def build_scenario(raw: Mapping[str, Any], *, fallback_id: str | None = None) -> Scenario:
    """Build a scenario from one raw record, applying conservative defaults."""
    scenario_id = _first_text(raw, _ID_KEYS) or fallback_id or ""
    return Scenario(
        scenario_id=scenario_id,
        description=_text(raw.get("description")),
        api_endpoint=_first_text(raw, _ENDPOINT_KEYS) or None,
        http_method=(_first_text(raw, _METHOD_KEYS) or "").upper() or None,
        category=_text(raw.get("category")),
        priority=normalize_priority(raw.get("priority")),
        risk_level=normalize_risk_level(_first_value(raw, _RISK_KEYS)),
        matching_rules=_parse_rules(_first_value(raw, _RULE_KEYS), scenario_id),
        tags=split_list(raw.get("tags"), separators=","),
        acceptance_criteria=split_list(_first_value(raw, _CRITERIA_KEYS), separators="\n;"),
    )


def build_candidate_test(raw: Mapping[str, Any], index: int) -> CandidateTest:
    """Build a candidate test record; id and description are required."""
    test_id = _first_text(raw, ("id", "testId", "test_id"))
    description = _text(raw.get("description"))
    if not test_id or not description:
        raise ScenarioLoadError(f"Test at index {index} requires both id and description.")
    line = raw.get("line", raw.get("lineNumber"))
    if line is not None and (isinstance(line, bool) or not isinstance(line, int)):
        raise ScenarioLoadError(f"Test '{test_id}' line must be an integer.")
    return CandidateTest(
        test_id=test_id,
        description=description,
        file_path=_first_text(raw, ("file", "filePath", "file_path")),
        suite=_text(raw.get("suite")) or None,
        line_number=line,
    )


def validate_scenarios(scenarios: Sequence[Scenario], source: str) -> None:
    """Reject scenarios missing id/description and duplicated ids, listing every problem."""
    errors: list[str] = []
    seen_ids: set[str] = set()
    for index, scenario in enumerate(scenarios):
        if not scenario.scenario_id:
            errors.append(f"Scenario at index {index} missing ID")
            continue
        if not scenario.description:
            errors.append(f"Scenario {scenario.scenario_id} missing description")
        if scenario.scenario_id in seen_ids:
            errors.append(f"Duplicate scenario ID: {scenario.scenario_id}")
        seen_ids.add(scenario.scenario_id)
    if errors:
        raise ScenarioLoadError(f"Validation errors in {source}:\n" + "\n".join(errors))


def normalize_priority(value: object) -> Priority:
    """Map free-form priority text onto P0..P3 (absent means P3)."""
    if value is None or not str(value).strip():
        return Priority.P3
    text = str(value).upper()
    for pattern, priority in _PRIORITY_PATTERNS:
        if pattern.search(text):
            return priority
    return Priority.P3


def normalize_risk_level(value: object) -> RiskLevel:
    """Map free-form risk text onto a risk level (absent means Low)."""
    if value is None or not str(value).strip():
        return RiskLevel.LOW
    text = str(value).lower()
    for pattern, risk_level in _RISK_PATTERNS:
        if pattern.search(text):
            return risk_level
    return RiskLevel.LOW


def split_list(value: object, *, separators: str) -> tuple[str, ...]:
    """Accept a list or a delimited string and return stripped, non-empty items."""
    if value is None:
        return ()
    if isinstance(value, str):
        items: Iterable[object] = re.split(f"[{re.escape(separators)}]", value)
    elif isinstance(value, Sequence):
        items = value
    else:
        items = (value,)
    return tuple(text for text in (_text(item) for item in items) if text)


def _parse_rules(value: object, scenario_id: str) -> tuple[MatchingRule, ...]:
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ScenarioLoadError(f"Scenario {scenario_id}: matching rules must be a list.")
    rules = []
    for raw_rule in value:
        if not isinstance(raw_rule, Mapping):
            raise ScenarioLoadError(f"Scenario {scenario_id}: matching rule must be a mapping.")
        kind_text = _text(raw_rule.get("type", raw_rule.get("kind"))).lower()
        try:
            kind = RuleKind(kind_text)
        except ValueError as exc:
            raise ScenarioLoadError(
                f"Scenario {scenario_id}: unsupported matching rule type '{kind_text}'."
            ) from exc
        threshold = raw_rule.get("threshold", _DEFAULT_RULE_THRESHOLD)
        if isinstance(threshold, bool) or not isinstance(threshold, int | float):
            raise ScenarioLoadError(f"Scenario {scenario_id}: rule threshold must be a number.")
        rules.append(
            MatchingRule(kind=kind, pattern=_text(raw_rule.get("pattern")), threshold=threshold)
        )
    return tuple(rules)


def _first_value(raw: Mapping[str, Any], keys: Sequence[str]) -> object:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _first_text(raw: Mapping[str, Any], keys: Sequence[str]) -> str:
    return _text(_first_value(raw, keys))


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()
