"""Detection of APIs with neither a scenario nor an attributable test."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from scenario_test_mapper.coverage_classification.mapping_outcomes import ScenarioMapping
from scenario_test_mapper.matching_strategies.matching_models import (
    CandidateTest,
    RiskLevel,
    api_key_for,
)

_PATH_PARAMETER = re.compile(r"^(\{.*\}|:.+|<.*>)$")
_IGNORED_SEGMENTS = frozenset({"api", "v1", "v2", "v3"})


@dataclass(frozen=True)
class ApiEndpoint:
    """One endpoint exposed by the service under analysis."""

    endpoint: str
    method: str | None = None

    @property
    def api_key(self) -> str:
        return api_key_for(self.endpoint, self.method)


@dataclass(frozen=True)
class OrphanApi:
    """An API with no specification and no verification."""

    api: ApiEndpoint
    risk_level: RiskLevel
    reason: str
    recommendations: tuple[str, ...]


def find_orphan_apis(
    apis: Iterable[ApiEndpoint],
    mappings: Sequence[ScenarioMapping],
    tests: Sequence[CandidateTest],
) -> tuple[OrphanApi, ...]:
    """Flag APIs with zero scenarios and zero matched or attributable tests as Critical."""
    findings = []
    for api in apis:
        api_mappings = [mapping for mapping in mappings if _scenario_targets(mapping, api)]
        if api_mappings:
            continue
        if any(_attributable(test, api) for test in tests):
            continue
        findings.append(
            OrphanApi(
                api=api,
                risk_level=RiskLevel.CRITICAL,
                reason="API has neither a baseline scenario nor an attributable unit test",
                recommendations=(
                    f"QA action: add baseline scenarios for {api.api_key}",
                    f"Developer action: add unit tests exercising {api.api_key}",
                ),
            )
        )
    return tuple(findings)


def _scenario_targets(mapping: ScenarioMapping, api: ApiEndpoint) -> bool:
    scenario = mapping.scenario
    if not scenario.api_endpoint:
        return False
    if _normalize_path(scenario.api_endpoint) != _normalize_path(api.endpoint):
        return False
    if scenario.http_method and api.method:
        return scenario.http_method.strip().upper() == api.method.strip().upper()
    return True


def _attributable(test: CandidateTest, api: ApiEndpoint) -> bool:
    text = f"{test.test_id} {test.description}".lower()
    if api.endpoint.lower() in text:
        return True
    segments = _significant_segments(api.endpoint)
    return bool(segments) and all(segment in text for segment in segments)


def _significant_segments(endpoint: str) -> tuple[str, ...]:
    return tuple(
        segment.lower()
        for segment in endpoint.split("/")
        if segment
        and segment.lower() not in _IGNORED_SEGMENTS
        and not _PATH_PARAMETER.match(segment)
    )


def _normalize_path(endpoint: str) -> str:
    return endpoint.strip().rstrip("/").lower()
