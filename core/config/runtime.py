"""
Runtime Configuration

Central configuration for tree construction and the CLI / API hosts.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.hashing import DEFAULT_HASH_ALGORITHM, HASH_FUNCTIONS, HashFn, get_hash_fn
from core.schemas.errors import ConfigException, UnsupportedHashException

load_dotenv()

logger = logging.getLogger(__name__)


ENV_PREFIX = "ARBOR_"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}
_OUTPUT_FORMATS = {"human", "json"}


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    chunk_size: Optional[int] = None  # None: one block per input file
    log_level: str = "INFO"
    log_file: Optional[str] = None
    output_format: str = "human"  # "human" or "json"
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check field values.

        Raises:
            ConfigException: If any value is out of range
        """
        try:
            get_hash_fn(self.hash_algorithm)
        except UnsupportedHashException as e:
            raise ConfigException(e.message, details=e.details) from e

        if self.chunk_size is not None and self.chunk_size <= 0:
            raise ConfigException(f"chunk_size must be positive, got {self.chunk_size}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigException(f"Unknown log level: {self.log_level}")
        if self.output_format not in _OUTPUT_FORMATS:
            raise ConfigException(f"Unknown output format: {self.output_format}")

    @property
    def hash_fn(self) -> HashFn:
        return get_hash_fn(self.hash_algorithm)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - ARBOR_HASH_ALGORITHM: Hash function name (sha256, sha3_256, blake2b_256)
        - ARBOR_CHUNK_SIZE: Split input files into blocks of this many bytes
        - ARBOR_LOG_LEVEL: Log level
        - ARBOR_LOG_FILE: Optional log file path
        - ARBOR_OUTPUT_FORMAT: human or json
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}CHUNK_SIZE"):
            raw = os.getenv(f"{ENV_PREFIX}CHUNK_SIZE", "")
            try:
                overrides["chunk_size"] = int(raw)
            except ValueError as e:
                raise ConfigException(f"{ENV_PREFIX}CHUNK_SIZE must be an integer, got {raw!r}") from e
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper()
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")
        if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
            overrides["output_format"] = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", "human").lower()

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON or YAML file, chosen by extension."""
        path = Path(path)
        if path.suffix.lower() in {".yaml", ".yml"}:
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        import json
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigException(f"Invalid JSON in config file {path}: {e}") from e

        return cls.from_dict(data or {})

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigException(f"Invalid YAML in config file {path}: {e}") from e

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        if not isinstance(data, dict):
            raise ConfigException(f"Configuration must be a mapping, got {type(data).__name__}")

        known = {"hash_algorithm", "chunk_size", "log_level", "log_file", "output_format"}
        kwargs = {k: v for k, v in data.items() if k in known}
        extra = dict(data.get("extra", {}))
        return cls(**kwargs, extra=extra)

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        new_config.validate()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return asdict(self)

    @staticmethod
    def supported_hash_algorithms() -> list[str]:
        return sorted(HASH_FUNCTIONS)


def default_config_paths() -> list[Path]:
    """Config file search order when no explicit path is given."""
    return [
        Path.cwd() / "arbor.json",
        Path.cwd() / ".arbor.json",
        Path.cwd() / "arbor.yaml",
        Path.home() / ".config" / "arbor" / "config.json",
    ]


def load_runtime_config(config_path: str | Path | None = None) -> RuntimeConfig:
    """
    Load configuration from a file, then overlay environment variables.

    Without config_path the first existing file from default_config_paths()
    is used; with none found the defaults apply.

    Raises:
        FileNotFoundError: If config_path is given but does not exist
        ConfigException: If the file or an override is invalid
    """
    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        config = RuntimeConfig()
        for path in default_config_paths():
            if path.exists():
                config = RuntimeConfig.from_file(path)
                logger.info(f"Loaded config from {path}")
                break

    return config.with_env_overrides()
