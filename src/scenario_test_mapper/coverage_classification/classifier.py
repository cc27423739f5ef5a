"""Coverage verdicts, gap explanations and recommendations for one scenario."""

from __future__ import annotations

from collections.abc import Sequence

from scenario_test_mapper.configuration.runtime_settings import DEFAULT_OVER_COVERED_THRESHOLD
from scenario_test_mapper.matching_strategies.matching_models import MatchDetail, Scenario

from .mapping_outcomes import CoverageStatus, CoverageVerdict

_HIGH_CONFIDENCE = 0.9
_MEDIUM_CONFIDENCE = 0.6


def classify(
    scenario: Scenario,
    match_details: Sequence[MatchDetail],
    *,
    over_covered_threshold: int = DEFAULT_OVER_COVERED_THRESHOLD,
) -> CoverageStatus:
    """Decide the coverage status from the scenario's match candidates.

    Assisted suggestions stay attached to the mapping but are not candidates.
    """
    match_details = match_candidates(match_details)
    if not match_details:
        return CoverageStatus.NOT_COVERED

    criteria_count = len(scenario.acceptance_criteria)
    if criteria_count > 0:
        if len(match_details) >= criteria_count:
            return CoverageStatus.FULLY_COVERED
        return CoverageStatus.PARTIALLY_COVERED

    if any(detail.confidence >= _HIGH_CONFIDENCE for detail in match_details):
        return CoverageStatus.FULLY_COVERED
    if any(detail.confidence >= _MEDIUM_CONFIDENCE for detail in match_details):
        return CoverageStatus.PARTIALLY_COVERED
    if len(match_details) > over_covered_threshold:
        return CoverageStatus.OVER_COVERED
    return CoverageStatus.PARTIALLY_COVERED


def assess_coverage(
    scenario: Scenario,
    match_details: Sequence[MatchDetail],
    *,
    over_covered_threshold: int = DEFAULT_OVER_COVERED_THRESHOLD,
) -> CoverageVerdict:
    """Classify the scenario and attach gap explanation and recommendations."""
    status = classify(scenario, match_details, over_covered_threshold=over_covered_threshold)
    return CoverageVerdict(
        status=status,
        gap_explanation=explain_gap(scenario, match_details, status),
        recommendations=recommend(scenario, status),
    )


def match_candidates(match_details: Sequence[MatchDetail]) -> tuple[MatchDetail, ...]:
    """Details produced by the deterministic threshold, excluding assisted suggestions."""
    return tuple(detail for detail in match_details if not detail.assisted)


def explain_gap(
    scenario: Scenario, match_details: Sequence[MatchDetail], status: CoverageStatus
) -> str:
    """Describe why the scenario received its verdict."""
    match_details = match_candidates(match_details)
    if status == CoverageStatus.FULLY_COVERED:
        return "Scenario is fully covered by unit tests"
    if status == CoverageStatus.OVER_COVERED:
        return (
            f"Scenario has {len(match_details)} matching tests - "
            "may indicate overly generic tests"
        )
    if status == CoverageStatus.PARTIALLY_COVERED:
        criteria_count = len(scenario.acceptance_criteria)
        if criteria_count > len(match_details):
            return (
                f"Scenario is partially covered ({len(match_details)} test(s) for "
                f"{criteria_count} acceptance criteria)"
            )
        return (
            f"Scenario is partially covered ({len(match_details)} test(s) found "
            "with medium confidence)"
        )
    return "No unit test found for this scenario - Developer action required"


def recommend(scenario: Scenario, status: CoverageStatus) -> tuple[str, ...]:
    """Status-specific follow-up actions."""
    if status == CoverageStatus.NOT_COVERED:
        return (
            f"Create unit test for: {scenario.description}",
            f"Test should cover API: {scenario.api_key if scenario.api_endpoint else 'N/A'}",
            f"Priority: {scenario.priority.value}, Risk: {scenario.risk_level.value}",
        )
    if status == CoverageStatus.PARTIALLY_COVERED:
        return (
            "Enhance existing tests to improve coverage",
            "Consider adding edge case tests",
            "Review test assertions for completeness",
        )
    if status == CoverageStatus.OVER_COVERED:
        return (
            "Review if tests are too generic",
            "Consider consolidating duplicate tests",
            "Ensure each test has a specific focus",
        )
    return ("No action required - keep tests aligned with scenario changes",)
