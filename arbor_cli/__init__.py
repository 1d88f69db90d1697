"""
Arbor CLI

Command-line interface for building Merkle roots and inclusion proofs.

Usage:
    python -m arbor_cli root a.txt b.txt c.txt
    python -m arbor_cli prove a.txt b.txt c.txt --index 2 --out proof.json
    python -m arbor_cli verify --proof proof.json --block c.txt
    python -m arbor_cli config --init
"""

__version__ = "0.1.0"
