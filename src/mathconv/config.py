"""Project-level configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "mathconv.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "max_nesting_depth": 200,
    "max_formula_length": None,
    "logging_fsync": False,
    "logging_tail_bytes": 2_097_152,  # 2 MB
}


def load_config(project_dir: Path) -> dict[str, Any]:
    """Load configuration from ``mathconv.yaml``, with defaults.

    Args:
        project_dir: Directory that may contain ``mathconv.yaml``.

    Returns:
        Merged configuration dict.

    Raises:
        ValueError: If the file does not hold a YAML mapping.
    """
    config = dict(DEFAULT_CONFIG)
    config_path = project_dir / CONFIG_FILENAME
    if config_path.exists():
        user_config = yaml.safe_load(config_path.read_text()) or {}
        if not isinstance(user_config, dict):
            raise ValueError(f"{config_path} must contain a mapping")
        config.update(user_config)
    return config
