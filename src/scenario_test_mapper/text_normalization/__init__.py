"""Text normalization exports."""

from .normalizer import (
    DEFAULT_STOP_WORDS,
    NormalizationOptions,
    TextNormalizer,
    normalize,
    stem,
    tokenize,
)
from .token_cache import InMemoryTokenCache, NullTokenCache, TokenCache

__all__ = [
    "DEFAULT_STOP_WORDS",
    "NormalizationOptions",
    "TextNormalizer",
    "normalize",
    "stem",
    "tokenize",
    "TokenCache",
    "InMemoryTokenCache",
    "NullTokenCache",
]
