"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m arbor_cli root FILE... [--chunk-size N] [--hash NAME] [--json]
    python -m arbor_cli prove FILE... --index I [--out PATH] [--json]
    python -m arbor_cli verify --proof PATH --block FILE [--root HEX] [--json]
    python -m arbor_cli config --init

Environment Variables:
    ARBOR_HASH_ALGORITHM     Hash function (default: sha256)
    ARBOR_CHUNK_SIZE         Split input files into fixed-size blocks
    ARBOR_LOG_LEVEL          Log level (default: INFO)
    ARBOR_LOG_FILE           Optional log file
    ARBOR_OUTPUT_FORMAT      human or json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from arbor_cli import __version__
from arbor_cli.commands import root, prove, verify
from arbor_cli.config import get_default_config_template, load_config
from core.crypto.hashing import HASH_FUNCTIONS


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _add_block_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "files",
        nargs="*",
        help="Input files, in leaf order",
    )
    parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=None,
        help="Split each file into blocks of this many bytes (default: one block per file)",
    )
    parser.add_argument(
        "--hash",
        type=str,
        choices=sorted(HASH_FUNCTIONS),
        default=None,
        help="Hash function (default: from config or sha256)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="arbor",
        description="Arbor CLI - Build Merkle roots, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./arbor.json or ~/.config/arbor/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of input files",
        description="Hash each block, build the tree bottom-up and print the root.",
    )
    _add_block_arguments(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one block",
        description="Build the tree and emit a JSON proof document for the block at --index.",
    )
    _add_block_arguments(prove_parser)
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="0-based index of the block to prove",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document to this path (default: stdout)",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a block against a proof document",
        description="Recompute the root from a block and its proof and compare it with the claimed root.",
    )
    verify_parser.add_argument(
        "--proof", "-p",
        type=str,
        required=True,
        help="Path to a proof document produced by `arbor prove`",
    )
    verify_parser.add_argument(
        "--block", "-b",
        type=str,
        required=True,
        help="Path to the block being proven",
    )
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        default=None,
        help="Expected root as hex (default: root recorded in the proof)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="arbor.json",
        help="Path for config file (default: arbor.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (ARBOR_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: arbor config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
