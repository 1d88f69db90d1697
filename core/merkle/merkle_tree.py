"""
Merkle - Tree Implementation
Deterministic Merkle tree construction and proof generation.

This module provides:
- MerkleTree: immutable tree holding every level from leaves to root
- Module-level build / root / prove / verify entry points
- Standard padding rule for odd-sized levels

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = hash_fn(block)
2. Parent hashing: parent = hash_fn(left + right)
3. Padding rule: an unpaired last node is paired with itself,
   parent = hash_fn(last + last). Every level below the root therefore
   contributes exactly one proof step.
4. Empty input: the tree has no levels and no root; reading it raises
   EmptyTreeException
5. Single leaf: root = leaf (no internal hashing)

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from core.crypto.hashing import HashFn, ensure_digest, hash_concat, sha256, to_hex
from core.merkle.merkle_proofs import MerkleProof, ProofStep, Side, verify_proof
from core.schemas.errors import EmptyTreeException, IndexOutOfRangeException


logger = logging.getLogger(__name__)


def merkle_parent(left: bytes, right: bytes, hash_fn: HashFn = sha256) -> bytes:
    """
    Compute the parent digest of two child nodes.

    Parent digest is deterministic: hash_fn(left + right)
    """
    return hash_concat(left, right, hash_fn)


def build_next_level(level: Sequence[bytes], hash_fn: HashFn = sha256) -> tuple[bytes, ...]:
    """
    Derive the next level up from the given one.

    Consecutive nodes are paired left-to-right. If the level has an odd
    number of nodes the last one is paired with itself.

    Example: [a, b, c] -> [parent(a, b), parent(c, c)]
    """
    next_level: list[bytes] = []
    for i in range(0, len(level), 2):
        left = level[i]
        right = level[i + 1] if i + 1 < len(level) else left
        next_level.append(merkle_parent(left, right, hash_fn))
    return tuple(next_level)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of levels in a tree with the given number of leaves.

    Depth counts levels from leaves to root inclusive: a single leaf has
    depth 1, two leaves have depth 2, an empty tree has depth 0.
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


def expected_proof_length(num_leaves: int) -> int:
    """Number of proof steps for any leaf of a tree with num_leaves leaves."""
    return max(compute_tree_depth(num_leaves) - 1, 0)


class MerkleTree:
    """
    An immutable Merkle tree over an ordered sequence of blocks.

    Levels are stored as a tuple of tuples: levels[0] holds the leaf
    digests and levels[-1] holds the single root digest. An empty tree
    has no levels.

    Example:
        >>> tree = MerkleTree.build([b"a", b"b", b"c", b"d"])
        >>> proof = tree.prove(2)
        >>> MerkleTree.verify(b"c", 2, proof, tree.root)
        True
    """

    __slots__ = ("_levels", "_hash_fn")

    def __init__(self, levels: Iterable[Iterable[bytes]], hash_fn: HashFn = sha256) -> None:
        self._levels: tuple[tuple[bytes, ...], ...] = tuple(tuple(level) for level in levels)
        self._hash_fn = hash_fn

    @classmethod
    def build(cls, blocks: Iterable[bytes], hash_fn: HashFn = sha256) -> "MerkleTree":
        """
        Build a tree from raw data blocks.

        Args:
            blocks: Ordered data blocks. Order is significant and preserved.
            hash_fn: 32-byte hash function (default SHA-256)

        Returns:
            MerkleTree; empty if blocks is empty

        Raises:
            TypeError: If a block is not bytes-like
        """
        leaves = []
        for i, block in enumerate(blocks):
            if not isinstance(block, (bytes, bytearray, memoryview)):
                raise TypeError(f"Block {i} must be bytes-like, got {type(block).__name__}")
            leaves.append(hash_fn(bytes(block)))
        return cls._from_leaf_digests(leaves, hash_fn)

    @classmethod
    def from_leaves(cls, leaves: Iterable[bytes], hash_fn: HashFn = sha256) -> "MerkleTree":
        """
        Build a tree from already-hashed leaf digests.

        Raises:
            InvalidDigestException: If any leaf is not a 32-byte digest
        """
        checked = [ensure_digest(leaf, f"leaf {i}") for i, leaf in enumerate(leaves)]
        return cls._from_leaf_digests(checked, hash_fn)

    @classmethod
    def _from_leaf_digests(cls, leaves: list[bytes], hash_fn: HashFn) -> "MerkleTree":
        if not leaves:
            logger.debug("Built empty Merkle tree")
            return cls((), hash_fn)

        levels: list[tuple[bytes, ...]] = [tuple(leaves)]
        while len(levels[-1]) > 1:
            levels.append(build_next_level(levels[-1], hash_fn))

        logger.debug("Built Merkle tree: %d leaves, %d levels", len(leaves), len(levels))
        return cls(levels, hash_fn)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def hash_fn(self) -> HashFn:
        return self._hash_fn

    @property
    def levels(self) -> tuple[tuple[bytes, ...], ...]:
        """All levels, leaves first, root level last."""
        return self._levels

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self._levels[0] if self._levels else ()

    @property
    def leaf_count(self) -> int:
        return len(self.leaves)

    @property
    def depth(self) -> int:
        """Number of levels, including the leaf and root levels."""
        return len(self._levels)

    @property
    def is_empty(self) -> bool:
        return not self._levels

    @property
    def root(self) -> bytes:
        """
        The root digest.

        Raises:
            EmptyTreeException: If the tree was built from zero blocks
        """
        if not self._levels:
            raise EmptyTreeException()
        return self._levels[-1][0]

    def root_or_none(self) -> bytes | None:
        """The root digest, or None for an empty tree."""
        return self._levels[-1][0] if self._levels else None

    @property
    def root_hex(self) -> str:
        """Lowercase hex of the root digest."""
        return to_hex(self.root)

    def leaf(self, index: int) -> bytes:
        """Leaf digest at index."""
        self._check_index(index)
        return self.leaves[index]

    def __len__(self) -> int:
        return self.leaf_count

    def __repr__(self) -> str:
        root = self.root_or_none()
        root_repr = to_hex(root)[:16] + "..." if root is not None else None
        return f"MerkleTree(leaf_count={self.leaf_count}, depth={self.depth}, root={root_repr})"

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < self.leaf_count:
            raise IndexOutOfRangeException(index, self.leaf_count)

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def prove(self, leaf_index: int) -> MerkleProof:
        """
        Generate an inclusion proof for the leaf at leaf_index.

        Algorithm:
        1. Start at level 0, position = leaf_index
        2. At each level below the root:
           - Even position: sibling is position + 1, side RIGHT
           - Odd position: sibling is position - 1, side LEFT
           - Sibling past the end of the level: the node pairs with itself
           - Move up: position = position // 2
        3. Stop at the root level

        Raises:
            IndexOutOfRangeException: If leaf_index is not in [0, leaf_count)
        """
        self._check_index(leaf_index)

        steps: list[ProofStep] = []
        position = leaf_index
        for level in self._levels[:-1]:
            if position % 2 == 0:
                sibling_position = position + 1
                side = Side.RIGHT
                if sibling_position >= len(level):
                    sibling_position = position
            else:
                sibling_position = position - 1
                side = Side.LEFT

            steps.append(ProofStep(sibling=level[sibling_position], side=side))
            position //= 2

        return MerkleProof(leaf_index=leaf_index, steps=tuple(steps))

    @staticmethod
    def verify(
        leaf_data: bytes,
        leaf_index: int,
        proof: MerkleProof,
        expected_root: bytes,
        hash_fn: HashFn = sha256,
    ) -> bool:
        """Verify a proof without holding the tree. See verify_proof."""
        return verify_proof(leaf_data, leaf_index, proof, expected_root, hash_fn)

    def verify_block(self, leaf_data: bytes, leaf_index: int, proof: MerkleProof) -> bool:
        """Verify a proof against this tree's root and hash function."""
        return verify_proof(leaf_data, leaf_index, proof, self.root, self._hash_fn)


# ----------------------------------------------------------------------
# Module-level entry points
# ----------------------------------------------------------------------

def build(blocks: Iterable[bytes], hash_fn: HashFn = sha256) -> MerkleTree:
    """Build a Merkle tree from raw data blocks."""
    return MerkleTree.build(blocks, hash_fn)


def root(tree: MerkleTree) -> bytes:
    """
    Root digest of a tree.

    Raises:
        EmptyTreeException: If the tree is empty
    """
    return tree.root


def prove(tree: MerkleTree, leaf_index: int) -> MerkleProof:
    """Inclusion proof for a leaf. Raises IndexOutOfRangeException."""
    return tree.prove(leaf_index)


def verify(
    leaf_data: bytes,
    leaf_index: int,
    proof: MerkleProof,
    expected_root: bytes,
    hash_fn: HashFn = sha256,
) -> bool:
    """Verify an inclusion proof against a claimed root."""
    return verify_proof(leaf_data, leaf_index, proof, expected_root, hash_fn)


__all__ = [
    "MerkleTree",
    "merkle_parent",
    "build_next_level",
    "compute_tree_depth",
    "expected_proof_length",
    "build",
    "root",
    "prove",
    "verify",
]
