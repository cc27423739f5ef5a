"""Scenario-to-test scoring exports."""

from .aggregation import (
    StrategyScores,
    aggregate,
    confidence_for,
    evaluate_candidate,
    explain_match,
    rank_candidates,
    score_strategies,
)
from .matching_models import (
    UNSPECIFIED_API_KEY,
    CandidateTest,
    MatchDetail,
    MatchingRule,
    Priority,
    RiskLevel,
    RuleKind,
    Scenario,
    api_key_for,
)
from .pattern_engines import Pattern, PatternEngine, RegexPatternEngine
from .strategies import (
    STRATEGY_SCORERS,
    StrategyContext,
    extract_keywords,
    levenshtein_distance,
    score,
    score_exact,
    score_fuzzy,
    score_jaccard,
    score_keyword,
    score_levenshtein,
    score_regex,
    score_semantic,
)

__all__ = [
    "CandidateTest",
    "MatchDetail",
    "MatchingRule",
    "Priority",
    "RiskLevel",
    "RuleKind",
    "Scenario",
    "UNSPECIFIED_API_KEY",
    "api_key_for",
    "Pattern",
    "PatternEngine",
    "RegexPatternEngine",
    "STRATEGY_SCORERS",
    "StrategyContext",
    "extract_keywords",
    "levenshtein_distance",
    "score",
    "score_exact",
    "score_fuzzy",
    "score_jaccard",
    "score_keyword",
    "score_levenshtein",
    "score_regex",
    "score_semantic",
    "StrategyScores",
    "aggregate",
    "confidence_for",
    "evaluate_candidate",
    "explain_match",
    "rank_candidates",
    "score_strategies",
]
