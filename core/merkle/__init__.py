"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: immutable tree built once from ordered data blocks
- MerkleProof / ProofStep / Side: inclusion proof for one leaf
- build / root / prove / verify: functional entry points

Commitment Rules:
1. Leaf hashing: sha256(block)
2. Parent hashing: sha256(left + right)
3. Padding: pair the last node with itself if a level has an odd count
4. Empty tree: no root (EmptyTreeException)
5. Single leaf: root = leaf

Usage:
    from core.merkle import build, prove, verify

    tree = build([b"a", b"b", b"c", b"d"])
    proof = prove(tree, 2)
    assert verify(b"c", 2, proof, tree.root)
"""
from .merkle_proofs import (
    Side,
    ProofStep,
    MerkleProof,
    expected_side,
    verify_leaf_digest,
    verify_proof,
)

from .merkle_tree import (
    MerkleTree,
    merkle_parent,
    build_next_level,
    compute_tree_depth,
    expected_proof_length,
    build,
    root,
    prove,
    verify,
)


__all__ = [
    # Core types
    "MerkleTree",
    "MerkleProof",
    "ProofStep",
    "Side",
    # Core functions
    "build",
    "root",
    "prove",
    "verify",
    "verify_proof",
    "verify_leaf_digest",
    # Helpers
    "merkle_parent",
    "build_next_level",
    "compute_tree_depth",
    "expected_proof_length",
    "expected_side",
]
