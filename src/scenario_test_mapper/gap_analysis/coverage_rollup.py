"""Per-API and global coverage counters and the gap list."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from scenario_test_mapper.coverage_classification.mapping_outcomes import (
    CoverageStatus,
    ScenarioMapping,
)
from scenario_test_mapper.matching_strategies.matching_models import Priority, RiskLevel


@dataclass(frozen=True)
class CoverageSummary:  # pylint: disable=too-many-instance-attributes
    """Scenario counts by coverage status."""

    total_scenarios: int
    fully_covered: int
    partially_covered: int
    not_covered: int
    over_covered: int
    coverage_percent: float
    gaps_by_priority: Mapping[Priority, int]

    def to_dict(self) -> dict[str, object]:
        """Serialize using the camelCase keys consumed by report collaborators."""
        return {
            "totalScenarios": self.total_scenarios,
            "fullyCovered": self.fully_covered,
            "partiallyCovered": self.partially_covered,
            "notCovered": self.not_covered,
            "overCovered": self.over_covered,
            "coveragePercent": self.coverage_percent,
            "gapsByPriority": {
                priority.value: self.gaps_by_priority.get(priority, 0) for priority in Priority
            },
        }


@dataclass(frozen=True)
class ApiCoverage:
    """Coverage rollup for the scenarios of one API."""

    api_key: str
    endpoint: str | None
    method: str | None
    scenario_ids: tuple[str, ...]
    summary: CoverageSummary


@dataclass(frozen=True)
class CoverageGap:
    """A scenario that is not, or only partially, covered."""

    scenario_id: str
    description: str
    api_key: str
    status: CoverageStatus
    priority: Priority
    risk_level: RiskLevel
    reason: str
    recommendations: tuple[str, ...]


def summarize_coverage(mappings: Iterable[ScenarioMapping]) -> CoverageSummary:
    """Count scenarios per status and bucket gaps by priority."""
    counts = {status: 0 for status in CoverageStatus}
    gaps_by_priority = {priority: 0 for priority in Priority}
    total = 0
    for mapping in mappings:
        total += 1
        counts[mapping.coverage_status] += 1
        if mapping.coverage_status.is_gap:
            gaps_by_priority[mapping.scenario.priority] += 1
    fully_covered = counts[CoverageStatus.FULLY_COVERED]
    return CoverageSummary(
        total_scenarios=total,
        fully_covered=fully_covered,
        partially_covered=counts[CoverageStatus.PARTIALLY_COVERED],
        not_covered=counts[CoverageStatus.NOT_COVERED],
        over_covered=counts[CoverageStatus.OVER_COVERED],
        coverage_percent=(fully_covered / total) * 100 if total else 0.0,
        gaps_by_priority=gaps_by_priority,
    )


def summarize_by_api(mappings: Sequence[ScenarioMapping]) -> tuple[ApiCoverage, ...]:
    """Group mappings by ``"METHOD endpoint"`` and roll each group up."""
    grouped: dict[str, list[ScenarioMapping]] = {}
    for mapping in mappings:
        grouped.setdefault(mapping.scenario.api_key, []).append(mapping)
    rollups = []
    for api_key, api_mappings in grouped.items():
        first = api_mappings[0].scenario
        rollups.append(
            ApiCoverage(
                api_key=api_key,
                endpoint=first.api_endpoint,
                method=first.http_method.upper() if first.http_method else None,
                scenario_ids=tuple(mapping.scenario.scenario_id for mapping in api_mappings),
                summary=summarize_coverage(api_mappings),
            )
        )
    return tuple(rollups)


def collect_gaps(mappings: Iterable[ScenarioMapping]) -> tuple[CoverageGap, ...]:
    """List every gap, most urgent priority first."""
    gaps = [
        CoverageGap(
            scenario_id=mapping.scenario.scenario_id,
            description=mapping.scenario.description,
            api_key=mapping.scenario.api_key,
            status=mapping.coverage_status,
            priority=mapping.scenario.priority,
            risk_level=mapping.scenario.risk_level,
            reason=mapping.gap_explanation,
            recommendations=mapping.recommendations,
        )
        for mapping in mappings
        if mapping.coverage_status.is_gap
    ]
    gaps.sort(key=lambda gap: gap.priority.value)
    return tuple(gaps)
