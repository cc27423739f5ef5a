"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from scenario_test_mapper.text_normalization import DEFAULT_STOP_WORDS, NormalizationOptions

from .runtime_settings import (
    DEFAULT_OVER_COVERED_THRESHOLD,
    DEFAULT_PARALLELISM,
    DEFAULT_STRATEGIES,
    DEFAULT_SYNONYM_DISCOUNT,
    DEFAULT_SYNONYMS,
    DEFAULT_THRESHOLD,
    AnalysisSettings,
    Configuration,
    MatchingConfig,
    StrategyName,
)

LOGGER = logging.getLogger(__name__)

_NORMALIZATION_FLAGS: tuple[tuple[str, bool], ...] = (
    ("lowercase", True),
    ("remove_punctuation", True),
    ("collapse_whitespace", True),
    ("remove_stop_words", True),
    ("stemming", False),
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def default_configuration() -> Configuration:
    """Return the configuration used when no configuration file is supplied."""
    return Configuration(path=None, matching=MatchingConfig(), analysis=AnalysisSettings())


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    matching = _parse_matching_section(parsed.get("matching"))
    analysis = _parse_analysis_section(parsed.get("analysis"))
    LOGGER.debug(
        "Loaded configuration %s with strategies %s",
        path,
        ", ".join(strategy.value for strategy in matching.strategies),
    )
    return Configuration(path=path, matching=matching, analysis=analysis)


def _parse_matching_section(value: Any) -> MatchingConfig:
    section = _optional_mapping(value, "matching")
    strategies = _parse_strategies(section.get("strategies"))
    weights = _parse_weights(section.get("weights"))
    threshold = _require_unit_interval(
        section.get("default_threshold", DEFAULT_THRESHOLD), "matching.default_threshold"
    )
    normalization = _parse_normalization(
        section.get("normalization"), section.get("stop_words")
    )
    synonyms = _parse_synonyms(section.get("synonyms"))
    synonym_discount = _require_unit_interval(
        section.get("synonym_discount", DEFAULT_SYNONYM_DISCOUNT), "matching.synonym_discount"
    )
    over_covered_threshold = _require_positive_int(
        section.get("over_covered_threshold", DEFAULT_OVER_COVERED_THRESHOLD),
        "matching.over_covered_threshold",
    )
    return MatchingConfig(
        strategies=strategies,
        weights=weights,
        default_threshold=threshold,
        normalization=normalization,
        synonyms=synonyms,
        synonym_discount=synonym_discount,
        over_covered_threshold=over_covered_threshold,
    )


def _parse_strategies(value: Any) -> tuple[StrategyName, ...]:
    if value is None:
        return DEFAULT_STRATEGIES
    names = _normalize_string_sequence(value, "matching.strategies")
    if not names:
        raise ConfigurationError("matching.strategies must contain at least one strategy.")
    strategies: list[StrategyName] = []
    for name in names:
        strategy = _parse_strategy_name(name, "matching.strategies")
        if strategy not in strategies:
            strategies.append(strategy)
    return tuple(strategies)


def _parse_weights(value: Any) -> dict[StrategyName, float]:
    section = _optional_mapping(value, "matching.weights")
    weights: dict[StrategyName, float] = {}
    for raw_name, raw_weight in section.items():
        strategy = _parse_strategy_name(raw_name, "matching.weights")
        weights[strategy] = _require_positive_number(
            raw_weight, f"matching.weights.{strategy.value}"
        )
    return weights


def _parse_normalization(value: Any, stop_words_value: Any) -> NormalizationOptions:
    section = _optional_mapping(value, "matching.normalization")
    flags = {
        name: _require_bool(section.get(name, default), f"matching.normalization.{name}")
        for name, default in _NORMALIZATION_FLAGS
    }
    stop_words = DEFAULT_STOP_WORDS
    if stop_words_value is not None:
        stop_words = frozenset(
            word.lower()
            for word in _normalize_string_sequence(stop_words_value, "matching.stop_words")
        )
    return NormalizationOptions(stop_words=stop_words, **flags)


def _parse_synonyms(value: Any) -> dict[str, tuple[str, ...]]:
    merged = dict(DEFAULT_SYNONYMS)
    section = _optional_mapping(value, "matching.synonyms")
    for raw_token, raw_synonyms in section.items():
        if not isinstance(raw_token, str) or not raw_token.strip():
            raise ConfigurationError("matching.synonyms keys must be non-empty strings.")
        token = raw_token.strip().lower()
        synonyms = _normalize_string_sequence(raw_synonyms, f"matching.synonyms.{token}")
        merged[token] = tuple(synonym.lower() for synonym in synonyms)
    return merged


def _parse_analysis_section(value: Any) -> AnalysisSettings:
    section = _optional_mapping(value, "analysis")
    parallelism = _require_positive_int(
        section.get("parallelism", DEFAULT_PARALLELISM), "analysis.parallelism"
    )
    return AnalysisSettings(parallelism=parallelism)


def _parse_strategy_name(value: Any, field_name: str) -> StrategyName:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} entries must be strings.")
    try:
        return StrategyName(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(strategy.value for strategy in StrategyName)
        raise ConfigurationError(
            f"{field_name} contains unknown strategy '{value}'. Allowed: {allowed}."
        ) from exc


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_positive_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigurationError(f"{field_name} must be a number.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return float(value)


def _require_unit_interval(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigurationError(f"{field_name} must be a number.")
    if not 0 <= value <= 1:
        raise ConfigurationError(f"{field_name} must be between 0 and 1.")
    return float(value)


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
