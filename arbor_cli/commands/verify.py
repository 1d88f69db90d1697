"""
CLI Verify Command

Verify that a block is included under a Merkle root using a proof
document produced by `arbor prove`.

Usage:
    arbor verify --proof proof.json --block c.txt [--root HEX] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from arbor_cli.commands.root import use_json_output
from core.crypto.hashing import digest_from_hex, get_hash_fn, to_hex
from core.merkle import verify_proof
from core.schemas.errors import ArborException
from core.schemas.proof import ProofDocument


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    The root defaults to the one recorded in the proof document; --root
    checks against an independently obtained root instead.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0=verified, 1=error, 2=not verified)
    """
    proof_path = Path(args.proof)
    block_path = Path(args.block)

    for path in (proof_path, block_path):
        if not path.is_file():
            print(f"Error: File not found: {path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    try:
        document = ProofDocument.from_json(proof_path.read_bytes())
        hash_fn = get_hash_fn(document.hash_algorithm)
        expected_root = digest_from_hex(args.root, "root") if args.root else document.root_bytes()
        verified = verify_proof(
            block_path.read_bytes(),
            document.leaf_index,
            document.to_proof(),
            expected_root,
            hash_fn,
        )
    except ArborException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if use_json_output(args):
        print(json.dumps({
            "verified": verified,
            "leaf_index": document.leaf_index,
            "root": to_hex(expected_root),
        }, indent=2))
    else:
        print(f"leaf_index: {document.leaf_index}")
        print(f"root: {to_hex(expected_root)}")
        print(f"verified: {str(verified).lower()}")

    if verified:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
