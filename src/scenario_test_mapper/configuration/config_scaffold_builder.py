"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "mapper-config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Matching configuration for scenario-test-mapper.
# Every key is optional; removing a key restores its default.

matching:
  # Active strategies: exact, fuzzy, semantic, keyword, levenshtein, jaccard, regex.
  # At least one strategy is required.
  strategies:
    - fuzzy
    - keyword
  # Per-strategy weights for the weighted mean (missing strategies weigh 1.0).
  weights:
    fuzzy: 1.0
    keyword: 1.0
  # A test matches a scenario when its aggregate score reaches this value (0..1).
  default_threshold: 0.5
  normalization:
    lowercase: true
    remove_punctuation: true
    collapse_whitespace: true
    remove_stop_words: true
    stemming: false
  # Extra synonyms merged over the built-in dictionary.
  # synonyms:
  #   create: [add, post]
  # Replaces the built-in English stop-word list when set.
  # stop_words: [a, an, the]
  # Calibration knobs; revisit them against your own scenario data.
  synonym_discount: 0.8
  over_covered_threshold: 5

analysis:
  # Worker threads used to match scenarios concurrently.
  parallelism: 4
"""


def build_placeholder_configuration() -> str:
    """Build a YAML matching configuration with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the matching configuration scaffold to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
