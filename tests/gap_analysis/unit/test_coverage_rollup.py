"""Coverage rollup and gap list tests."""

from __future__ import annotations

import pytest
from scenario_test_mapper.coverage_classification import CoverageStatus, ScenarioMapping
from scenario_test_mapper.gap_analysis import collect_gaps, summarize_by_api, summarize_coverage
from scenario_test_mapper.matching_strategies import Priority, Scenario


def _mapping(
    scenario_id: str,
    status: CoverageStatus,
    *,
    priority: Priority = Priority.P3,
    endpoint: str | None = None,
    method: str | None = None,
) -> ScenarioMapping:
    return ScenarioMapping(
        scenario=Scenario(
            scenario_id=scenario_id,
            description=f"scenario {scenario_id}",
            api_endpoint=endpoint,
            http_method=method,
            priority=priority,
        ),
        match_details=(),
        coverage_status=status,
        match_score=0.0,
        gap_explanation=f"reason {scenario_id}",
        recommendations=(f"action {scenario_id}",),
    )


_MAPPINGS = (
    _mapping("S1", CoverageStatus.FULLY_COVERED, endpoint="/api/users", method="post"),
    _mapping(
        "S2",
        CoverageStatus.NOT_COVERED,
        priority=Priority.P0,
        endpoint="/api/users",
        method="POST",
    ),
    _mapping("S3", CoverageStatus.PARTIALLY_COVERED, priority=Priority.P1, endpoint="/api/orders"),
    _mapping("S4", CoverageStatus.OVER_COVERED),
)


def test_summary_counts_each_status_and_buckets_gaps_by_priority() -> None:
    summary = summarize_coverage(_MAPPINGS)

    assert summary.total_scenarios == 4
    assert summary.fully_covered == 1
    assert summary.partially_covered == 1
    assert summary.not_covered == 1
    assert summary.over_covered == 1
    assert summary.coverage_percent == pytest.approx(25.0)
    assert summary.gaps_by_priority[Priority.P0] == 1
    assert summary.gaps_by_priority[Priority.P1] == 1
    assert summary.gaps_by_priority[Priority.P3] == 0


def test_summary_counts_add_up_to_total() -> None:
    summary = summarize_coverage(_MAPPINGS)

    assert (
        summary.fully_covered
        + summary.partially_covered
        + summary.not_covered
        + summary.over_covered
        == summary.total_scenarios
    )


def test_empty_summary_reports_zero_percent() -> None:
    summary = summarize_coverage([])

    assert summary.total_scenarios == 0
    assert summary.coverage_percent == 0.0


def test_summary_serializes_with_camel_case_keys() -> None:
    payload = summarize_coverage(_MAPPINGS).to_dict()

    assert payload == {
        "totalScenarios": 4,
        "fullyCovered": 1,
        "partiallyCovered": 1,
        "notCovered": 1,
        "overCovered": 1,
        "coveragePercent": 25.0,
        "gapsByPriority": {"P0": 1, "P1": 1, "P2": 0, "P3": 0},
    }


def test_per_api_rollup_groups_by_method_and_endpoint() -> None:
    rollups = {rollup.api_key: rollup for rollup in summarize_by_api(_MAPPINGS)}

    assert set(rollups) == {"POST /api/users", "/api/orders", "UNSPECIFIED"}
    users = rollups["POST /api/users"]
    assert users.scenario_ids == ("S1", "S2")
    assert users.method == "POST"
    assert users.summary.coverage_percent == pytest.approx(50.0)
    assert rollups["UNSPECIFIED"].endpoint is None


def test_gaps_list_only_not_and_partially_covered_most_urgent_first() -> None:
    gaps = collect_gaps(_MAPPINGS)

    assert [gap.scenario_id for gap in gaps] == ["S2", "S3"]
    assert gaps[0].api_key == "POST /api/users"
    assert gaps[0].reason == "reason S2"
    assert gaps[0].recommendations == ("action S2",)
