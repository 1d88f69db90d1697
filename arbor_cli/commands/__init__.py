"""
CLI command modules.
"""

from arbor_cli.commands import root, prove, verify

__all__ = ["root", "prove", "verify"]
