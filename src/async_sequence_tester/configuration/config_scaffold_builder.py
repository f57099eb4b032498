"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "async-sequence-tester.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration for async-sequence-tester.
# Every setting is optional; remove a line to fall back to its default.

validation:
  # Longest rendering of an element or error kept in failure messages.
  max_rendered_length: 200
  # Suspend on the event loop before each replayed element.
  yield_between_elements: true

reporting:
  # Directory for results workbooks, relative to this file.
  # Defaults to the directory of the first scenario file.
  # output_dir: "results"

logging:
  # One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
  level: "WARNING"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration to the requested output path.

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
