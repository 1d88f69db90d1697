"""
Pytest configuration and shared fixtures for Arbor tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used block fixtures
3. Isolates tests from ARBOR_* environment variables
"""

import os
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


def make_blocks(count: int, prefix: str = "block") -> list[bytes]:
    """Create `count` distinct blocks."""
    return [f"{prefix}{i}".encode() for i in range(count)]


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def _clear_arbor_env(monkeypatch):
    """Keep ARBOR_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("ARBOR_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def abcd_blocks() -> list[bytes]:
    """The four-block scenario [a, b, c, d]."""
    return [b"a", b"b", b"c", b"d"]


@pytest.fixture
def abc_blocks() -> list[bytes]:
    """Odd-count scenario [a, b, c]."""
    return [b"a", b"b", b"c"]


@pytest.fixture
def blocks_factory():
    """Factory for distinct block lists."""
    return make_blocks
