"""Coverage classification exports."""

from .classifier import assess_coverage, classify, explain_gap, match_candidates, recommend
from .mapping_outcomes import CoverageStatus, CoverageVerdict, ScenarioMapping
from .scenario_mapper import AssistedMatcher, map_scenario, map_scenarios

__all__ = [
    "AssistedMatcher",
    "CoverageStatus",
    "CoverageVerdict",
    "ScenarioMapping",
    "assess_coverage",
    "classify",
    "explain_gap",
    "match_candidates",
    "recommend",
    "map_scenario",
    "map_scenarios",
]
