"""
Runtime Configuration Module

Provides configuration loading and management for Arbor.
"""

from .runtime import ENV_PREFIX, RuntimeConfig, default_config_paths, load_runtime_config

__all__ = [
    "ENV_PREFIX",
    "RuntimeConfig",
    "default_config_paths",
    "load_runtime_config",
]
