"""
CLI Prove Command

Generate an inclusion proof for one block and emit it as a JSON
proof document.

Usage:
    arbor prove a.txt b.txt c.txt --index 2 [--out proof.json] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from arbor_cli.commands.root import build_tree_from_args, use_json_output
from core.schemas.errors import EmptyTreeException, IndexOutOfRangeException
from core.schemas.proof import ProofDocument


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Without --out the proof document is written to stdout.

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

    if tree.is_empty:
        print(f"Error: {EmptyTreeException().message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        proof = tree.prove(args.index)
    except IndexOutOfRangeException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    document = ProofDocument.from_proof(
        proof,
        tree.root,
        leaf_count=tree.leaf_count,
        hash_algorithm=algorithm,
    )
    payload = document.model_dump_json(indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(payload + "\n")
        logger.info(f"Wrote proof for leaf {proof.leaf_index} to {out_path}")
        if use_json_output(args):
            print(payload)
        else:
            print(f"leaf_index: {proof.leaf_index}")
            print(f"steps: {len(proof.steps)}")
            print(f"root: {document.root}")
            print(f"proof: {out_path}")
    else:
        print(payload)

    return EXIT_SUCCESS
