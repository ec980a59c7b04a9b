"""Configuration loading for poststore.

Settings live in an optional poststore.yaml at the project root. Missing keys
fall back to DEFAULT_CONFIG.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .errors import StorageError

CONFIG_FILENAME = "poststore.yaml"

DEFAULT_CONFIG = {
    "content_dir": "posts",
    "extensions": [".md"],
    "markdown_plugins": ["strikethrough", "footnotes", "table", "url"],
    "cache": True,
}


def load_config(project_root: Path) -> dict[str, Any]:
    """Load configuration from poststore.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        StorageError: If the file exists but is not valid YAML, or a
            setting has the wrong type.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise StorageError(f"invalid YAML: {exc}", config_path) from exc
        if isinstance(loaded, dict):
            config.update(loaded)
    if isinstance(config["extensions"], str):
        config["extensions"] = [config["extensions"]]
    if not isinstance(config["cache"], bool):
        raise StorageError(
            f"cache must be true or false, got {config['cache']!r}", config_path
        )
    return config
