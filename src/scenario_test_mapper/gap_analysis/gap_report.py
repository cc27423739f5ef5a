"""Cross-cutting analysis over a complete set of scenario mappings."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from scenario_test_mapper.coverage_classification.mapping_outcomes import ScenarioMapping
from scenario_test_mapper.matching_strategies.matching_models import (
    CandidateTest,
    Priority,
    Scenario,
)

from .completeness import CompletenessGap, find_completeness_gaps
from .coverage_rollup import (
    ApiCoverage,
    CoverageGap,
    CoverageSummary,
    collect_gaps,
    summarize_by_api,
    summarize_coverage,
)
from .orphan_apis import ApiEndpoint, OrphanApi, find_orphan_apis
from .orphan_tests import OrphanAnalysis, OrphanCategory, analyze_orphans, find_orphan_tests

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GapAnalysisResult:  # pylint: disable=too-many-instance-attributes
    """Every finding derived after all scenarios were matched."""

    summary: CoverageSummary
    api_coverage: tuple[ApiCoverage, ...]
    gaps: tuple[CoverageGap, ...]
    orphan_tests: tuple[tuple[CandidateTest, OrphanCategory], ...]
    orphan_analysis: OrphanAnalysis
    orphan_apis: tuple[OrphanApi, ...]
    completeness_gaps: tuple[CompletenessGap, ...]
    critical_issues: tuple[str, ...]


def analyze_gaps(
    mappings: Sequence[ScenarioMapping],
    tests: Sequence[CandidateTest],
    *,
    apis: Sequence[ApiEndpoint] = (),
    suggested_scenarios: Sequence[Scenario] = (),
) -> GapAnalysisResult:
    """Roll up coverage and compute orphans, orphan APIs and completeness gaps."""
    summary = summarize_coverage(mappings)
    orphan_tests = tuple(find_orphan_tests(tests, mappings))
    orphan_apis = find_orphan_apis(apis, mappings, tests)
    completeness_gaps = find_completeness_gaps(
        [mapping.scenario for mapping in mappings], suggested_scenarios, tests
    )
    LOGGER.info(
        "Coverage %.1f%% (%d/%d fully covered), %d orphan test(s), %d orphan API(s)",
        summary.coverage_percent,
        summary.fully_covered,
        summary.total_scenarios,
        len(orphan_tests),
        len(orphan_apis),
    )
    return GapAnalysisResult(
        summary=summary,
        api_coverage=summarize_by_api(mappings),
        gaps=collect_gaps(mappings),
        orphan_tests=orphan_tests,
        orphan_analysis=analyze_orphans(orphan_tests),
        orphan_apis=orphan_apis,
        completeness_gaps=completeness_gaps,
        critical_issues=_critical_issues(summary, orphan_apis),
    )


def _critical_issues(
    summary: CoverageSummary, orphan_apis: Sequence[OrphanApi]
) -> tuple[str, ...]:
    issues: list[str] = []
    p0_gaps = summary.gaps_by_priority.get(Priority.P0, 0)
    if p0_gaps:
        issues.append(f"{p0_gaps} P0 scenario(s) without full test coverage")
    for orphan_api in orphan_apis:
        issues.append(f"{orphan_api.api.api_key} has no scenario and no unit test")
    return tuple(issues)
