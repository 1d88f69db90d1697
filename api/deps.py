"""
API Dependencies

Dependency injection for the API.
Provides configuration and block decoding for route handlers.
"""

from __future__ import annotations

from functools import lru_cache

from api.errors import InvalidRequestError
from core.config.runtime import RuntimeConfig, load_runtime_config


@lru_cache(maxsize=1)
def get_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig using the shared file search order, then overlay
    environment variables.

    Environment variables ALWAYS override config file values.
    """
    return load_runtime_config()


def resolve_hash_algorithm(requested: str | None) -> str:
    """Per-request algorithm wins over the server configuration."""
    return requested or get_runtime_config().hash_algorithm


def decode_block(value: str, encoding: str) -> bytes:
    """
    Decode a submitted block string to bytes.

    Raises:
        InvalidRequestError: If a hex block is not valid hex
    """
    if encoding == "hex":
        try:
            return bytes.fromhex(value)
        except ValueError as e:
            raise InvalidRequestError(f"Block is not valid hex: {e}") from e
    return value.encode("utf-8")


def decode_blocks(values: list[str], encoding: str) -> list[bytes]:
    return [decode_block(v, encoding) for v in values]
