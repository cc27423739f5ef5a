"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from scenario_test_mapper.text_normalization import NormalizationOptions


class StrategyName(str, Enum):
    """Scoring strategies available to the matcher."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    SEMANTIC = "semantic"
    KEYWORD = "keyword"
    LEVENSHTEIN = "levenshtein"
    JACCARD = "jaccard"
    REGEX = "regex"


DEFAULT_STRATEGIES: tuple[StrategyName, ...] = (StrategyName.FUZZY, StrategyName.KEYWORD)
DEFAULT_THRESHOLD = 0.5
DEFAULT_SYNONYM_DISCOUNT = 0.8
DEFAULT_OVER_COVERED_THRESHOLD = 5
DEFAULT_PARALLELISM = 4

DEFAULT_SYNONYMS: Mapping[str, tuple[str, ...]] = {
    "create": ("add", "post", "insert", "register", "new"),
    "add": ("create", "post", "insert"),
    "get": ("fetch", "retrieve", "read", "find", "load"),
    "fetch": ("get", "retrieve", "read"),
    "retrieve": ("get", "fetch", "read", "find"),
    "update": ("modify", "edit", "put", "patch", "change"),
    "modify": ("update", "edit", "change"),
    "delete": ("remove", "destroy", "erase"),
    "remove": ("delete", "destroy"),
    "list": ("all", "search", "query", "filter"),
    "user": ("customer", "account", "member", "profile"),
    "customer": ("user", "client", "account"),
    "invalid": ("bad", "malformed", "incorrect", "wrong"),
    "missing": ("absent", "empty", "null", "blank"),
    "unauthorized": ("unauthenticated", "forbidden", "denied"),
    "error": ("failure", "exception", "fail"),
}


@dataclass(frozen=True)
class MatchingConfig:  # pylint: disable=too-many-instance-attributes
    """Strategy selection, weighting and text options for scenario-to-test matching."""

    strategies: tuple[StrategyName, ...] = DEFAULT_STRATEGIES
    weights: Mapping[StrategyName, float] = field(default_factory=dict)
    default_threshold: float = DEFAULT_THRESHOLD
    normalization: NormalizationOptions = field(default_factory=NormalizationOptions)
    synonyms: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_SYNONYMS)
    )
    synonym_discount: float = DEFAULT_SYNONYM_DISCOUNT
    over_covered_threshold: int = DEFAULT_OVER_COVERED_THRESHOLD

    def weight_for(self, strategy: StrategyName) -> float:
        """Return the configured weight, defaulting to 1.0."""
        return self.weights.get(strategy, 1.0)


@dataclass(frozen=True)
class AnalysisSettings:
    """Execution settings for an analysis run."""

    parallelism: int = DEFAULT_PARALLELISM


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    matching: MatchingConfig
    analysis: AnalysisSettings
