"""
CLI Root Command

Build a Merkle tree over input files and print its root.

Usage:
    arbor root a.txt b.txt c.txt [--chunk-size N] [--hash NAME] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from typing import Any

from core.blocks import read_blocks
from core.crypto.hashing import get_hash_fn, to_hex
from core.merkle import MerkleTree
from core.schemas.errors import EmptyTreeException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class RootSummary:
    """Summary of a built tree for CLI output."""
    hash_algorithm: str = ""
    leaf_count: int = 0
    depth: int = 0
    root: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def resolve_hash_algorithm(args: Namespace) -> str:
    """--hash wins over the configured algorithm."""
    name = getattr(args, "hash", None)
    if name:
        return name
    config = getattr(args, "cli_config", None)
    return config.hash_algorithm if config is not None else "sha256"


def resolve_chunk_size(args: Namespace) -> int | None:
    """--chunk-size wins over the configured chunk size."""
    chunk_size = getattr(args, "chunk_size", None)
    if chunk_size is not None:
        return chunk_size
    config = getattr(args, "cli_config", None)
    return config.chunk_size if config is not None else None


def build_tree_from_args(args: Namespace) -> tuple[MerkleTree, str]:
    """Read blocks named on the command line and build the tree."""
    algorithm = resolve_hash_algorithm(args)
    hash_fn = get_hash_fn(algorithm)
    blocks = read_blocks(args.files, chunk_size=resolve_chunk_size(args))
    logger.info(f"Building Merkle tree over {len(blocks)} blocks ({algorithm})")
    return MerkleTree.build(blocks, hash_fn), algorithm


def use_json_output(args: Namespace) -> bool:
    if getattr(args, "json", False):
        return True
    config = getattr(args, "cli_config", None)
    return config is not None and config.output_format == "json"


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        tree, algorithm = build_tree_from_args(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        root = tree.root
    except EmptyTreeException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = RootSummary(
        hash_algorithm=algorithm,
        leaf_count=tree.leaf_count,
        depth=tree.depth,
        root=to_hex(root),
    )

    if use_json_output(args):
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"blocks: {summary.leaf_count}")
        print(f"hash: {summary.hash_algorithm}")
        print(f"depth: {summary.depth}")
        print(f"root: {summary.root}")

    return EXIT_SUCCESS
