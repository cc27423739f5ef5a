"""Independent scenario-vs-test similarity strategies, each scoring in [0, 1]."""

from __future__ import annotations

import re
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from scenario_test_mapper.configuration.runtime_settings import MatchingConfig, StrategyName
from scenario_test_mapper.text_normalization import TextNormalizer, TokenCache

from .matching_models import CandidateTest, RuleKind, Scenario
from .pattern_engines import Pattern, PatternEngine, RegexPatternEngine

_ENDPOINT_SEPARATORS = re.compile(r"[/\-_]")
_MAX_DESCRIPTION_KEYWORDS = 5
_MIN_DESCRIPTION_KEYWORD_LENGTH = 5
_MIN_ENDPOINT_SEGMENT_LENGTH = 3
_FUZZY_ENDPOINT_BONUS = 0.2


@dataclass
class StrategyContext:
    """Immutable matching inputs shared by every strategy during one run.

    The only mutable member is the compiled-rule memo, which is filled lazily and
    guarded by a lock so one context can serve concurrent scoring calls.
    """

    config: MatchingConfig
    normalizer: TextNormalizer
    pattern_engine: PatternEngine = field(default_factory=RegexPatternEngine)
    _compiled_rules: dict[str, tuple[Pattern, ...]] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @classmethod
    def from_config(
        cls,
        config: MatchingConfig,
        *,
        cache: TokenCache | None = None,
        pattern_engine: PatternEngine | None = None,
    ) -> StrategyContext:
        return cls(
            config=config,
            normalizer=TextNormalizer(config.normalization, cache),
            pattern_engine=pattern_engine or RegexPatternEngine(),
        )

    def regex_patterns(self, scenario: Scenario) -> tuple[Pattern, ...]:
        """Return the scenario's compilable regex rules, compiling each source once."""
        sources = tuple(
            rule.pattern for rule in scenario.matching_rules if rule.kind == RuleKind.REGEX
        )
        if not sources:
            return ()
        key = "\x00".join(sources)
        with self._lock:
            cached = self._compiled_rules.get(key)
        if cached is not None:
            return cached
        compiled = tuple(
            pattern
            for pattern in (self.pattern_engine.compile(source) for source in sources)
            if pattern is not None
        )
        with self._lock:
            self._compiled_rules[key] = compiled
        return compiled


StrategyScorer = Callable[[Scenario, CandidateTest, StrategyContext], float]


def score_exact(scenario: Scenario, test: CandidateTest, context: StrategyContext) -> float:
    """Literal endpoint/id reference or normalized equality; substring containment scores 0.9."""
    if not scenario.description or not test.description:
        return 0.0
    if _endpoint_in_text(scenario, test.description):
        return 1.0
    if scenario.scenario_id and scenario.scenario_id in test.description:
        return 1.0
    scenario_text = context.normalizer.normalize(scenario.description)
    test_text = context.normalizer.normalize(test.description)
    if not scenario_text:
        return 0.0
    if scenario_text == test_text:
        return 1.0
    if scenario_text in test_text:
        return 0.9
    return 0.0


def score_fuzzy(scenario: Scenario, test: CandidateTest, context: StrategyContext) -> float:
    """Token-set overlap relative to the larger set, plus an endpoint bonus."""
    scenario_tokens = set(context.normalizer.tokenize(scenario.description))
    test_tokens = set(context.normalizer.tokenize(test.description))
    if not scenario_tokens or not test_tokens:
        return 0.0
    similarity = len(scenario_tokens & test_tokens) / max(len(scenario_tokens), len(test_tokens))
    if _endpoint_in_text(scenario, test.description):
        return min(1.0, similarity + _FUZZY_ENDPOINT_BONUS)
    return similarity


def score_semantic(scenario: Scenario, test: CandidateTest, context: StrategyContext) -> float:
    """Per-token verbatim or synonym presence, synonyms earning a discounted award."""
    scenario_tokens = context.normalizer.tokenize(scenario.description)
    if not scenario_tokens:
        return 0.0
    test_tokens = set(context.normalizer.tokenize(test.description))
    synonyms = context.config.synonyms
    total = 0.0
    for token in scenario_tokens:
        if token in test_tokens:
            total += 1.0
        elif any(synonym in test_tokens for synonym in synonyms.get(token, ())):
            total += context.config.synonym_discount
    return total / len(scenario_tokens)


def score_keyword(scenario: Scenario, test: CandidateTest, context: StrategyContext) -> float:
    """Fraction of scenario keywords literally present in the normalized test text."""
    keywords = extract_keywords(scenario, context)
    if not keywords:
        return 0.0
    test_text = context.normalizer.normalize(test.description)
    return sum(1 for keyword in keywords if keyword in test_text) / len(keywords)


def score_levenshtein(scenario: Scenario, test: CandidateTest, context: StrategyContext) -> float:
    """One minus the edit distance relative to the longer normalized string."""
    first = context.normalizer.normalize(scenario.description)
    second = context.normalizer.normalize(test.description)
    longest = max(len(first), len(second))
    if longest == 0:
        return 0.0
    return max(0.0, 1.0 - levenshtein_distance(first, second) / longest)


def score_jaccard(scenario: Scenario, test: CandidateTest, context: StrategyContext) -> float:
    """Intersection over union of the two token sets."""
    scenario_tokens = set(context.normalizer.tokenize(scenario.description))
    test_tokens = set(context.normalizer.tokenize(test.description))
    union = scenario_tokens | test_tokens
    if not union:
        return 0.0
    return len(scenario_tokens & test_tokens) / len(union)


def score_regex(scenario: Scenario, test: CandidateTest, context: StrategyContext) -> float:
    """1.0 when any regex rule matches the test id or description; invalid rules are skipped."""
    for pattern in context.regex_patterns(scenario):
        if pattern.matches(test.test_id) or pattern.matches(test.description):
            return 1.0
    return 0.0


STRATEGY_SCORERS: Mapping[StrategyName, StrategyScorer] = {
    StrategyName.EXACT: score_exact,
    StrategyName.FUZZY: score_fuzzy,
    StrategyName.SEMANTIC: score_semantic,
    StrategyName.KEYWORD: score_keyword,
    StrategyName.LEVENSHTEIN: score_levenshtein,
    StrategyName.JACCARD: score_jaccard,
    StrategyName.REGEX: score_regex,
}


def score(
    scenario: Scenario,
    test: CandidateTest,
    strategy: StrategyName,
    context: StrategyContext,
) -> float:
    """Score one scenario/test pair with the named strategy."""
    return STRATEGY_SCORERS[strategy](scenario, test, context)


def extract_keywords(scenario: Scenario, context: StrategyContext) -> tuple[str, ...]:
    """Collect identifier, endpoint segments, category, tags and the longest description words."""
    keywords: dict[str, None] = {}
    _add_keyword(keywords, scenario.scenario_id)
    if scenario.api_endpoint:
        for segment in _ENDPOINT_SEPARATORS.split(scenario.api_endpoint):
            if len(segment) >= _MIN_ENDPOINT_SEGMENT_LENGTH:
                _add_keyword(keywords, segment)
    _add_keyword(keywords, scenario.category)
    for tag in scenario.tags:
        _add_keyword(keywords, tag)

    long_tokens = list(
        dict.fromkeys(
            token
            for token in context.normalizer.tokenize(scenario.description)
            if len(token) >= _MIN_DESCRIPTION_KEYWORD_LENGTH
        )
    )
    long_tokens.sort(key=len, reverse=True)
    for token in long_tokens[:_MAX_DESCRIPTION_KEYWORDS]:
        _add_keyword(keywords, token)
    return tuple(keywords)


def levenshtein_distance(first: str, second: str) -> int:
    """Classic insert/delete/substitute edit distance."""
    if len(first) < len(second):
        first, second = second, first
    previous = list(range(len(second) + 1))
    for row, first_char in enumerate(first, start=1):
        current = [row]
        for column, second_char in enumerate(second, start=1):
            cost = 0 if first_char == second_char else 1
            current.append(
                min(
                    previous[column] + 1,
                    current[column - 1] + 1,
                    previous[column - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def _add_keyword(keywords: dict[str, None], value: str | None) -> None:
    if value and value.strip():
        keywords[value.strip().lower()] = None


def _endpoint_in_text(scenario: Scenario, text: str) -> bool:
    endpoint = scenario.api_endpoint
    return endpoint is not None and endpoint != "" and endpoint in text
