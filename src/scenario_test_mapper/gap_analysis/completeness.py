"""Cross-check of the baseline against a supplementary suggested-scenario set."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from scenario_test_mapper.matching_strategies.matching_models import (
    CandidateTest,
    Priority,
    Scenario,
)

DEFAULT_MIN_SHARED_WORDS = 4

_REVIEW_MARKERS = re.compile(r"\s*(✅|🆕)\s*$")


@dataclass(frozen=True)
class CompletenessGap:
    """A suggested scenario absent from the baseline."""

    suggested: Scenario
    api_key: str
    priority: Priority
    has_unit_test: bool
    reason: str
    recommendations: tuple[str, ...]


def find_completeness_gaps(
    baseline: Sequence[Scenario],
    suggested: Sequence[Scenario],
    tests: Sequence[CandidateTest] = (),
    *,
    min_shared_words: int = DEFAULT_MIN_SHARED_WORDS,
) -> tuple[CompletenessGap, ...]:
    """Report suggested scenarios with no near-duplicate in the baseline.

    These findings are kept apart from coverage gaps and never count towards the
    coverage percentage.
    """
    baseline_words = [_words(scenario.description) for scenario in baseline]
    test_words = [_words(test.description) for test in tests]
    gaps = []
    for candidate in suggested:
        words = _words(candidate.description)
        if not words:
            continue
        if any(len(words & existing) >= min_shared_words for existing in baseline_words):
            continue
        has_unit_test = any(len(words & existing) >= min_shared_words for existing in test_words)
        gaps.append(_build_gap(candidate, has_unit_test))
    return tuple(gaps)


def infer_priority(description: str) -> Priority:
    """Guess a priority from wording when none was authored."""
    lowered = description.lower()
    if any(word in lowered for word in ("critical", "security", "auth")):
        return Priority.P0
    if any(word in lowered for word in ("error", "invalid", "fail")):
        return Priority.P1
    if any(word in lowered for word in ("edge", "boundary")):
        return Priority.P2
    return Priority.P3


def _build_gap(candidate: Scenario, has_unit_test: bool) -> CompletenessGap:
    description = clean_description(candidate.description)
    priority = (
        candidate.priority if candidate.priority != Priority.P3 else infer_priority(description)
    )
    if has_unit_test:
        reason = "Unit test exists but scenario NOT in baseline (baseline incomplete)"
        recommendations = (
            "QA action: add this scenario to the baseline",
            f"Suggested scenario: {description}",
        )
    else:
        reason = "Scenario suggested, but NO baseline scenario AND NO unit test"
        recommendations = (
            "QA action: review the suggestion and add it to the baseline if relevant",
            "Developer action: create a unit test once the scenario is accepted",
            f"Suggested scenario: {description}",
        )
    return CompletenessGap(
        suggested=candidate,
        api_key=candidate.api_key,
        priority=priority,
        has_unit_test=has_unit_test,
        reason=reason,
        recommendations=recommendations,
    )


def clean_description(text: str) -> str:
    """Drop trailing review markers from suggested scenario text."""
    return _REVIEW_MARKERS.sub("", text or "").strip()


def _words(text: str) -> set[str]:
    return set(clean_description(text).lower().split())
