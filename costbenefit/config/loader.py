"""Load and validate analysis configs from JSON files."""

from __future__ import annotations

import json
from pathlib import Path

from costbenefit.config.schema import AnalysisConfig

# Default directory for analysis config files
_CONFIG_DIR = Path(__file__).parent / "configs"


def load_config(file_path: Path | None = None) -> AnalysisConfig:
    """Load and validate an analysis config from a JSON file.

    If no path is provided, loads the bundled default config.
    """
    if file_path is None:
        file_path = _CONFIG_DIR / "default_v1.json"

    if not file_path.exists():
        raise FileNotFoundError(f"Analysis config not found: {file_path}")

    with open(file_path, "r") as f:
        raw = json.load(f)

    return AnalysisConfig.model_validate(raw)


def get_default_config() -> AnalysisConfig:
    """Load the bundled default thresholds and constants."""
    return load_config()
