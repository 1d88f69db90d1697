"""
CLI Configuration

Locates the configuration file for the CLI and overlays environment
variables on top of it.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.config.runtime import RuntimeConfig, load_runtime_config


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. The file search order
    is shared with the API (core.config.default_config_paths).

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    return load_runtime_config(config_path)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    template = {
        "hash_algorithm": "sha256",
        "chunk_size": None,
        "log_level": "INFO",
        "log_file": None,
        "output_format": "human",
    }
    return json.dumps(template, indent=2) + "\n"
