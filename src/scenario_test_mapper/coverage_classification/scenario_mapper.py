"""Primary entry point mapping every scenario onto the candidate test pool."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from scenario_test_mapper.configuration.runtime_settings import MatchingConfig
from scenario_test_mapper.matching_strategies import (
    CandidateTest,
    MatchDetail,
    PatternEngine,
    Scenario,
    StrategyContext,
    confidence_for,
    explain_match,
    rank_candidates,
    score_strategies,
)
from scenario_test_mapper.text_normalization import InMemoryTokenCache, TokenCache

from .classifier import assess_coverage, match_candidates
from .mapping_outcomes import ScenarioMapping

LOGGER = logging.getLogger(__name__)

AssistedMatcher = Callable[[Scenario, Sequence[CandidateTest]], Iterable[str]]


def map_scenarios(
    scenarios: Sequence[Scenario],
    tests: Sequence[CandidateTest],
    config: MatchingConfig,
    *,
    parallelism: int = 1,
    cache: TokenCache | None = None,
    pattern_engine: PatternEngine | None = None,
    assisted_matcher: AssistedMatcher | None = None,
) -> list[ScenarioMapping]:
    """Score each scenario against every test and classify its coverage.

    Scenarios are independent, so ``parallelism > 1`` fans them out over a thread
    pool; the result keeps the input scenario order either way.
    """
    context = StrategyContext.from_config(
        config,
        cache=cache if cache is not None else InMemoryTokenCache(),
        pattern_engine=pattern_engine,
    )
    LOGGER.info("Matching %d scenario(s) against %d test(s)", len(scenarios), len(tests))

    def _map(scenario: Scenario) -> ScenarioMapping:
        return map_scenario(scenario, tests, context, assisted_matcher=assisted_matcher)

    if parallelism <= 1 or len(scenarios) <= 1:
        return [_map(scenario) for scenario in scenarios]
    with ThreadPoolExecutor(max_workers=parallelism) as executor:
        return list(executor.map(_map, scenarios))


def map_scenario(
    scenario: Scenario,
    tests: Sequence[CandidateTest],
    context: StrategyContext,
    *,
    assisted_matcher: AssistedMatcher | None = None,
) -> ScenarioMapping:
    """Build the mapping for a single scenario."""
    match_details = rank_candidates(scenario, tests, context)
    if assisted_matcher is not None:
        match_details = _with_assisted_matches(
            scenario, tests, context, match_details, assisted_matcher
        )
    verdict = assess_coverage(
        scenario,
        match_details,
        over_covered_threshold=context.config.over_covered_threshold,
    )
    candidates = match_candidates(match_details)
    LOGGER.debug(
        "Scenario %s: %s with %d match(es)",
        scenario.scenario_id,
        verdict.status.value,
        len(candidates),
    )
    return ScenarioMapping(
        scenario=scenario,
        match_details=match_details,
        coverage_status=verdict.status,
        match_score=candidates[0].score if candidates else 0.0,
        gap_explanation=verdict.gap_explanation,
        recommendations=verdict.recommendations,
    )


def _with_assisted_matches(
    scenario: Scenario,
    tests: Sequence[CandidateTest],
    context: StrategyContext,
    match_details: tuple[MatchDetail, ...],
    assisted_matcher: AssistedMatcher,
) -> tuple[MatchDetail, ...]:
    """Append tests proposed by the assisted matcher, scored deterministically."""
    try:
        suggested_ids = set(assisted_matcher(scenario, tests))
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOGGER.warning(
            "Assisted matcher failed for scenario %s: %s", scenario.scenario_id, exc
        )
        return match_details

    matched = {detail.test for detail in match_details}
    additions = []
    for test in tests:
        if test.test_id not in suggested_ids or test in matched:
            continue
        scores = score_strategies(scenario, test, context)
        explanation = explain_match(scenario, test, scores.aggregate, context)
        additions.append(
            MatchDetail(
                scenario_id=scenario.scenario_id,
                test=test,
                strategy=scores.winning_strategy,
                score=scores.aggregate,
                confidence=confidence_for(scores.aggregate),
                explanation=f"Suggested by assisted matcher; {explanation}",
                assisted=True,
            )
        )
    if not additions:
        return match_details
    LOGGER.debug(
        "Assisted matcher added %d test(s) to scenario %s", len(additions), scenario.scenario_id
    )
    return tuple(sorted(match_details + tuple(additions), key=lambda d: d.score, reverse=True))
