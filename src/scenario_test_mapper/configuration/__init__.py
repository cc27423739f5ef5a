"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, default_configuration, load_configuration
from .runtime_settings import (
    DEFAULT_SYNONYMS,
    AnalysisSettings,
    Configuration,
    MatchingConfig,
    StrategyName,
)

__all__ = [
    "AnalysisSettings",
    "Configuration",
    "MatchingConfig",
    "StrategyName",
    "DEFAULT_SYNONYMS",
    "ConfigurationError",
    "default_configuration",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
