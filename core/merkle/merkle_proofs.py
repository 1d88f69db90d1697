"""
Merkle - Inclusion Proofs
Proof types and static proof verification.

This module provides:
- Side: which operand a sibling digest is when recombining
- ProofStep / MerkleProof: immutable inclusion proof for one leaf
- verify_proof: recompute the root from a leaf block and a proof
- verify_leaf_digest: same check starting from an already-hashed leaf

Verification does not need the tree. The proof carries its own copies of
every sibling digest, so it stays valid after the tree is discarded.

Recombination Rules:
1. current = hash_fn(leaf_data)
2. Side.RIGHT: current = hash_fn(current + sibling)
3. Side.LEFT:  current = hash_fn(sibling + current)
4. Valid iff current == expected_root (byte-wise)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from core.crypto.hashing import DIGEST_SIZE, HashFn, ensure_digest, hash_concat, sha256
from core.schemas.errors import InvalidDigestException, MalformedProofException


logger = logging.getLogger(__name__)


class Side(str, Enum):
    """Position of a sibling digest relative to the node being proven."""

    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: "Side | str") -> "Side":
        """Accept a Side or its string value ("left" / "right", any case)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise MalformedProofException(f"Unknown proof side: {value!r}") from None


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    Attributes:
        sibling: Digest of the sibling node at this level
        side: Whether the sibling is the left or right operand
    """
    sibling: bytes
    side: Side


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf.

    Steps are ordered bottom-up, one per level below the root.

    Attributes:
        leaf_index: The 0-based index of the leaf in the original block list
        steps: Sibling digests with sides, from leaf level to just below the root
    """
    leaf_index: int
    steps: tuple[ProofStep, ...]

    def __post_init__(self) -> None:
        # Accept any iterable of steps but store an immutable tuple
        if not isinstance(self.steps, tuple):
            object.__setattr__(self, "steps", tuple(self.steps))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    @property
    def siblings(self) -> list[bytes]:
        """Sibling digests, bottom-up."""
        return [step.sibling for step in self.steps]

    @property
    def sides(self) -> list[Side]:
        """Sibling sides, bottom-up."""
        return [step.side for step in self.steps]

    @classmethod
    def from_pairs(
        cls,
        leaf_index: int,
        pairs: Iterable[tuple[bytes, Side | str]],
    ) -> "MerkleProof":
        """Build a proof from (sibling, side) pairs."""
        return cls(
            leaf_index=leaf_index,
            steps=tuple(ProofStep(sibling=s, side=Side.parse(side)) for s, side in pairs),
        )


def expected_side(leaf_index: int, level: int) -> Side:
    """
    Side the sibling must take at a given level for a given leaf index.

    A node at an odd position is a right child, so its sibling is on the left.
    """
    return Side.LEFT if (leaf_index >> level) & 1 else Side.RIGHT


def _check_proof_shape(leaf_index: int, proof: MerkleProof, expected_root: bytes) -> None:
    """Reject proofs that cannot be recombined meaningfully."""
    if not isinstance(leaf_index, int) or isinstance(leaf_index, bool):
        raise MalformedProofException(
            f"Leaf index must be an integer, got {type(leaf_index).__name__}"
        )
    if leaf_index < 0:
        raise MalformedProofException(
            f"Leaf index must be non-negative, got {leaf_index}",
            leaf_index=leaf_index,
        )
    if leaf_index >= 2 ** len(proof.steps):
        raise MalformedProofException(
            f"Proof of length {len(proof.steps)} cannot address leaf index {leaf_index}",
            leaf_index=leaf_index,
            details={"proof_length": len(proof.steps)},
        )

    try:
        ensure_digest(expected_root, "expected root")
        for level, step in enumerate(proof.steps):
            ensure_digest(step.sibling, f"sibling at level {level}")
    except InvalidDigestException as e:
        raise MalformedProofException(e.message, leaf_index=leaf_index, details=e.details) from e

    for level, step in enumerate(proof.steps):
        if not isinstance(step.side, Side):
            raise MalformedProofException(
                f"Proof step {level} has invalid side {step.side!r}",
                leaf_index=leaf_index,
            )


def verify_leaf_digest(
    leaf_digest: bytes,
    leaf_index: int,
    proof: MerkleProof,
    expected_root: bytes,
    hash_fn: HashFn = sha256,
) -> bool:
    """
    Verify that an already-hashed leaf is included under expected_root.

    Args:
        leaf_digest: hash_fn(block) for the block being proven
        leaf_index: Claimed index of the leaf
        proof: Inclusion proof for that index
        expected_root: The claimed Merkle root
        hash_fn: Hash function the tree was built with

    Returns:
        True if the recomputed root equals expected_root, False otherwise

    Raises:
        MalformedProofException: If the proof or root is structurally invalid
    """
    _check_proof_shape(leaf_index, proof, expected_root)
    if len(leaf_digest) != DIGEST_SIZE:
        raise MalformedProofException(
            f"Leaf digest must be {DIGEST_SIZE} bytes, got {len(leaf_digest)}",
            leaf_index=leaf_index,
        )

    current = bytes(leaf_digest)
    for level, step in enumerate(proof.steps):
        if step.side is not expected_side(leaf_index, level):
            logger.debug(
                "Proof side mismatch at level %d for leaf %d: got %s",
                level, leaf_index, step.side.value,
            )
            return False

        if step.side is Side.RIGHT:
            current = hash_concat(current, step.sibling, hash_fn)
        else:
            current = hash_concat(step.sibling, current, hash_fn)

    matched = current == bytes(expected_root)
    if not matched:
        logger.debug("Recomputed root mismatch for leaf %d", leaf_index)
    return matched


def verify_proof(
    leaf_data: bytes,
    leaf_index: int,
    proof: MerkleProof,
    expected_root: bytes,
    hash_fn: HashFn = sha256,
) -> bool:
    """
    Verify that a raw data block is included under expected_root.

    leaf_index is only used as a sanity check: the proof must be long enough
    to address it and each step's side must agree with the matching bit of
    the index. The decision itself is the byte comparison of the roots.

    Args:
        leaf_data: The raw block being proven
        leaf_index: Claimed index of the block
        proof: Inclusion proof for that index
        expected_root: The claimed Merkle root
        hash_fn: Hash function the tree was built with

    Returns:
        True if the proof is valid, False otherwise. A mismatch is not an error.

    Raises:
        MalformedProofException: If the proof or root is structurally invalid
    """
    return verify_leaf_digest(hash_fn(leaf_data), leaf_index, proof, expected_root, hash_fn)


__all__ = [
    "Side",
    "ProofStep",
    "MerkleProof",
    "expected_side",
    "verify_leaf_digest",
    "verify_proof",
]
