"""Weighted score aggregation, confidence staircase and candidate ranking."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from scenario_test_mapper.configuration.runtime_settings import StrategyName

from .matching_models import CandidateTest, MatchDetail, Scenario
from .strategies import StrategyContext, extract_keywords, score, score_regex

# (minimum score, confidence) steps, checked top-down.
_CONFIDENCE_STEPS: tuple[tuple[float, float], ...] = (
    (0.95, 1.0),
    (0.85, 0.95),
    (0.75, 0.85),
    (0.65, 0.75),
    (0.55, 0.65),
)
_EXPLANATION_KEYWORD_LIMIT = 3


@dataclass(frozen=True)
class StrategyScores:
    """Individual and combined scores for one scenario/test pair."""

    per_strategy: Mapping[StrategyName, float]
    weighted_mean: float
    regex_score: float | None
    aggregate: float

    @property
    def winning_strategy(self) -> StrategyName:
        """Strategy responsible for the aggregate score."""
        if self.regex_score is not None and self.regex_score > self.weighted_mean:
            return StrategyName.REGEX
        best_strategy = StrategyName.FUZZY
        best_score = 0.0
        for strategy, strategy_score in self.per_strategy.items():
            if strategy_score > best_score:
                best_strategy, best_score = strategy, strategy_score
        return best_strategy


def score_strategies(
    scenario: Scenario, test: CandidateTest, context: StrategyContext
) -> StrategyScores:
    """Score every active strategy and combine them into the aggregate."""
    per_strategy = {
        strategy: score(scenario, test, strategy, context)
        for strategy in context.config.strategies
    }
    total_weight = 0.0
    weighted_total = 0.0
    for strategy, strategy_score in per_strategy.items():
        weight = context.config.weight_for(strategy)
        weighted_total += weight * strategy_score
        total_weight += weight
    weighted_mean = weighted_total / total_weight if total_weight > 0 else 0.0

    regex_score: float | None = None
    aggregate_score = weighted_mean
    if scenario.matching_rules:
        regex_score = per_strategy.get(StrategyName.REGEX)
        if regex_score is None:
            regex_score = score_regex(scenario, test, context)
        aggregate_score = max(weighted_mean, regex_score)

    return StrategyScores(
        per_strategy=per_strategy,
        weighted_mean=weighted_mean,
        regex_score=regex_score,
        aggregate=aggregate_score,
    )


def aggregate(scenario: Scenario, test: CandidateTest, context: StrategyContext) -> float:
    """Return the combined match score; explicit rules can only raise it."""
    return score_strategies(scenario, test, context).aggregate


def confidence_for(match_score: float) -> float:
    """Map a raw score onto the non-linear confidence staircase."""
    for minimum, confidence in _CONFIDENCE_STEPS:
        if match_score >= minimum:
            return confidence
    return match_score


def evaluate_candidate(
    scenario: Scenario, test: CandidateTest, context: StrategyContext
) -> MatchDetail | None:
    """Return a match detail when the aggregate reaches the configured threshold."""
    scores = score_strategies(scenario, test, context)
    if scores.aggregate < context.config.default_threshold:
        return None
    return MatchDetail(
        scenario_id=scenario.scenario_id,
        test=test,
        strategy=scores.winning_strategy,
        score=scores.aggregate,
        confidence=confidence_for(scores.aggregate),
        explanation=explain_match(scenario, test, scores.aggregate, context),
    )


def rank_candidates(
    scenario: Scenario, tests: Sequence[CandidateTest], context: StrategyContext
) -> tuple[MatchDetail, ...]:
    """Match candidates for one scenario, highest score first (stable for ties)."""
    details = [
        detail
        for detail in (evaluate_candidate(scenario, test, context) for test in tests)
        if detail is not None
    ]
    details.sort(key=lambda detail: detail.score, reverse=True)
    return tuple(details)


def explain_match(
    scenario: Scenario, test: CandidateTest, match_score: float, context: StrategyContext
) -> str:
    """Short human-readable reason for a match."""
    explanations: list[str] = []
    if scenario.api_endpoint and scenario.api_endpoint in test.description:
        explanations.append(f"API endpoint '{scenario.api_endpoint}' found in test")
    if scenario.scenario_id and scenario.scenario_id in test.description:
        explanations.append(f"Scenario ID '{scenario.scenario_id}' referenced in test")

    test_text = context.normalizer.normalize(test.description)
    matched_keywords = [
        keyword for keyword in extract_keywords(scenario, context) if keyword in test_text
    ]
    if matched_keywords:
        shown = ", ".join(matched_keywords[:_EXPLANATION_KEYWORD_LIMIT])
        explanations.append(f"Matched keywords: {shown}")

    if not explanations:
        if match_score >= 0.8:
            explanations.append("High semantic similarity between scenario and test")
        elif match_score >= 0.6:
            explanations.append("Moderate similarity detected through fuzzy matching")
        else:
            explanations.append("Low confidence match - manual review recommended")
    return "; ".join(explanations)
