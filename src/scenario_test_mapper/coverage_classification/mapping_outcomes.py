"""Coverage classification entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from scenario_test_mapper.matching_strategies.matching_models import (
    CandidateTest,
    MatchDetail,
    Scenario,
)


class CoverageStatus(str, Enum):
    """Verdict describing how well a scenario is backed by tests."""

    FULLY_COVERED = "Fully Covered"
    PARTIALLY_COVERED = "Partially Covered"
    NOT_COVERED = "Not Covered"
    OVER_COVERED = "Over Covered"

    @property
    def is_gap(self) -> bool:
        """Return True for verdicts that count as coverage gaps."""
        return self in (CoverageStatus.NOT_COVERED, CoverageStatus.PARTIALLY_COVERED)


@dataclass(frozen=True)
class CoverageVerdict:
    """Classifier output for one scenario."""

    status: CoverageStatus
    gap_explanation: str
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class ScenarioMapping:
    """One scenario with its ranked matches and coverage verdict."""

    scenario: Scenario
    match_details: tuple[MatchDetail, ...]
    coverage_status: CoverageStatus
    match_score: float
    gap_explanation: str
    recommendations: tuple[str, ...]

    @property
    def matched_tests(self) -> tuple[CandidateTest, ...]:
        """Matched tests ordered by descending score."""
        return tuple(detail.test for detail in self.match_details)
