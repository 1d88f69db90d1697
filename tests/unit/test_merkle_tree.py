"""
Merkle Tree Unit Tests
Tests for core/merkle/merkle_tree.py

Covers:
1. Root determinism - same blocks -> same root
2. Order and content sensitivity
3. Padding correctness - odd level pairs the last node with itself
4. Proof generation - shape, sides and siblings
5. Empty tree - root lookup raises EmptyTreeException
6. Single leaf - root equals the leaf digest
"""
import pytest

from core.crypto.hashing import sha256, sha3_256
from core.merkle import (
    MerkleProof,
    MerkleTree,
    ProofStep,
    Side,
    build,
    build_next_level,
    compute_tree_depth,
    expected_proof_length,
    merkle_parent,
    prove,
    root,
    verify,
)
from core.schemas.errors import (
    EmptyTreeException,
    IndexOutOfRangeException,
    InvalidDigestException,
)


class TestEmptyTree:
    """Tests for empty tree behavior."""

    def test_empty_tree_has_no_levels(self):
        tree = build([])

        assert tree.is_empty
        assert tree.levels == ()
        assert tree.leaf_count == 0
        assert tree.depth == 0

    def test_empty_tree_root_raises(self):
        """Reading the root of an empty tree reports EmptyTree."""
        tree = build([])

        with pytest.raises(EmptyTreeException) as exc_info:
            _ = tree.root

        assert exc_info.value.code == "EMPTY_TREE"

    def test_module_root_raises_for_empty_tree(self):
        with pytest.raises(EmptyTreeException):
            root(build([]))

    def test_root_or_none_for_empty_tree(self):
        assert build([]).root_or_none() is None

    def test_prove_on_empty_tree_raises_index_error(self):
        with pytest.raises(IndexOutOfRangeException):
            build([]).prove(0)


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_single_leaf_root_equals_leaf_digest(self):
        """build([b]).root == digest(b)."""
        tree = build([b"only"])

        assert tree.root == sha256(b"only")
        assert tree.depth == 1

    def test_single_leaf_proof_has_no_steps(self):
        tree = build([b"only"])

        proof = tree.prove(0)

        assert proof.leaf_index == 0
        assert proof.steps == ()

    def test_single_leaf_proof_verifies(self):
        tree = build([b"only"])

        assert verify(b"only", 0, tree.prove(0), tree.root)


class TestRootDeterminism:
    """Tests for deterministic root computation."""

    def test_same_blocks_same_root(self, blocks_factory):
        roots = [build(blocks_factory(7)).root for _ in range(5)]

        assert all(r == roots[0] for r in roots)

    def test_block_order_matters(self):
        assert build([b"a", b"b", b"c"]).root != build([b"c", b"b", b"a"]).root

    def test_swapping_two_blocks_changes_root(self, blocks_factory):
        blocks = blocks_factory(6)
        swapped = list(blocks)
        swapped[1], swapped[4] = swapped[4], swapped[1]

        assert build(blocks).root != build(swapped).root

    def test_single_byte_change_changes_root(self):
        original = build([b"a", b"b", b"c", b"d"]).root
        changed = build([b"a", b"b", b"x", b"d"]).root

        assert original != changed

    def test_hash_function_changes_root(self, abcd_blocks):
        assert build(abcd_blocks).root != build(abcd_blocks, sha3_256).root


class TestConcreteScenario:
    """The four-block [a, b, c, d] scenario, computed by hand."""

    def test_levels_match_manual_computation(self, abcd_blocks):
        tree = build(abcd_blocks)
        leaves = [sha256(b) for b in abcd_blocks]
        level1 = [sha256(leaves[0] + leaves[1]), sha256(leaves[2] + leaves[3])]

        assert tree.leaves == tuple(leaves)
        assert tree.levels[1] == tuple(level1)
        assert tree.root == sha256(level1[0] + level1[1])

    def test_prove_index_two(self, abcd_blocks):
        tree = build(abcd_blocks)
        leaves = [sha256(b) for b in abcd_blocks]
        level1_left = sha256(leaves[0] + leaves[1])

        proof = prove(tree, 2)

        assert proof.steps == (
            ProofStep(sibling=leaves[3], side=Side.RIGHT),
            ProofStep(sibling=level1_left, side=Side.LEFT),
        )
        assert verify(b"c", 2, proof, tree.root)


class TestPaddingCorrectness:
    """Tests for odd-count self-pairing."""

    def test_three_blocks_pairs_last_with_itself(self, abc_blocks):
        a, b, c = (sha256(x) for x in abc_blocks)

        tree = build(abc_blocks)

        assert tree.levels[1] == (merkle_parent(a, b), merkle_parent(c, c))
        assert tree.root == merkle_parent(merkle_parent(a, b), merkle_parent(c, c))

    def test_five_blocks_pad_at_multiple_levels(self, blocks_factory):
        blocks = blocks_factory(5)
        a, b, c, d, e = (sha256(x) for x in blocks)

        # Level 1: [ab, cd, ee]; Level 2: [abcd, eeee]; Level 3: [root]
        ab = merkle_parent(a, b)
        cd = merkle_parent(c, d)
        ee = merkle_parent(e, e)
        expected_root = merkle_parent(merkle_parent(ab, cd), merkle_parent(ee, ee))

        tree = build(blocks)

        assert tree.depth == 4
        assert tree.root == expected_root

    def test_odd_leaf_proof_uses_itself_as_sibling(self, abc_blocks):
        tree = build(abc_blocks)
        c = sha256(b"c")

        proof = tree.prove(2)

        assert proof.steps[0] == ProofStep(sibling=c, side=Side.RIGHT)
        assert proof.steps[1] == ProofStep(sibling=tree.levels[1][0], side=Side.LEFT)

    @pytest.mark.parametrize("index", [0, 1, 2])
    def test_odd_tree_round_trips_each_index(self, abc_blocks, index):
        tree = build(abc_blocks)

        assert verify(abc_blocks[index], index, tree.prove(index), tree.root)

    def test_level_sizes_halve_rounding_up(self, blocks_factory):
        tree = build(blocks_factory(11))

        assert [len(level) for level in tree.levels] == [11, 6, 3, 2, 1]

    def test_build_next_level(self):
        a, b, c = sha256(b"a"), sha256(b"b"), sha256(b"c")

        assert build_next_level([a, b, c]) == (merkle_parent(a, b), merkle_parent(c, c))


class TestProofGeneration:
    """Tests for prove()."""

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 7, 8, 9, 16, 17])
    def test_every_index_verifies(self, blocks_factory, count):
        blocks = blocks_factory(count)
        tree = build(blocks)

        for i, block in enumerate(blocks):
            assert verify(block, i, tree.prove(i), tree.root), f"Proof failed for index {i}"

    @pytest.mark.parametrize("count", [2, 3, 5, 8, 13])
    def test_proof_length_is_uniform(self, blocks_factory, count):
        tree = build(blocks_factory(count))

        lengths = {len(tree.prove(i)) for i in range(count)}

        assert lengths == {expected_proof_length(count)}

    def test_proof_is_reproducible(self, blocks_factory):
        tree = build(blocks_factory(6))

        assert tree.prove(3) == tree.prove(3)

    def test_proof_outlives_tree(self, abcd_blocks):
        tree = build(abcd_blocks)
        proof = tree.prove(1)
        expected_root = tree.root
        del tree

        assert verify(b"b", 1, proof, expected_root)

    @pytest.mark.parametrize("bad_index", [4, -1, 100])
    def test_out_of_range_index_raises(self, abcd_blocks, bad_index):
        tree = build(abcd_blocks)

        with pytest.raises(IndexOutOfRangeException) as exc_info:
            prove(tree, bad_index)

        assert exc_info.value.details["leaf_index"] == bad_index
        assert exc_info.value.details["leaf_count"] == 4

    def test_out_of_range_is_an_index_error(self, abcd_blocks):
        with pytest.raises(IndexError):
            build(abcd_blocks).prove(4)

    def test_verify_block_uses_tree_root(self, abcd_blocks):
        tree = build(abcd_blocks)

        assert tree.verify_block(b"d", 3, tree.prove(3))
        assert not tree.verify_block(b"x", 3, tree.prove(3))


class TestFromLeaves:
    """Tests for building from pre-hashed leaves."""

    def test_from_leaves_matches_build(self, abcd_blocks):
        leaves = [sha256(b) for b in abcd_blocks]

        assert MerkleTree.from_leaves(leaves).root == build(abcd_blocks).root

    def test_from_leaves_rejects_bad_digest(self):
        with pytest.raises(InvalidDigestException):
            MerkleTree.from_leaves([sha256(b"a"), b"short"])


class TestImmutability:
    """Tree levels cannot be modified after construction."""

    def test_levels_are_tuples(self, abcd_blocks):
        tree = build(abcd_blocks)

        assert isinstance(tree.levels, tuple)
        assert all(isinstance(level, tuple) for level in tree.levels)

    def test_mutating_input_does_not_change_tree(self):
        blocks = [b"a", b"b"]
        tree = build(blocks)
        before = tree.root

        blocks.append(b"c")

        assert tree.root == before
        assert tree.leaf_count == 2


class TestBlockTypes:
    """Blocks must be bytes-like; nothing else is coerced."""

    @pytest.mark.parametrize("bad_block", [3, "a", None])
    def test_non_bytes_block_rejected(self, bad_block):
        with pytest.raises(TypeError, match="Block 1 must be bytes-like"):
            build([b"a", bad_block])

    def test_int_block_is_not_zero_bytes(self):
        with pytest.raises(TypeError):
            build([3])

    def test_bytearray_and_memoryview_hash_like_bytes(self):
        expected = build([b"ab", b"cd"]).root

        assert build([bytearray(b"ab"), memoryview(b"cd")]).root == expected


class TestComputeTreeDepth:
    """Tests for compute_tree_depth() and expected_proof_length()."""

    def test_depth_empty(self):
        assert compute_tree_depth(0) == 0

    def test_depth_single_leaf(self):
        assert compute_tree_depth(1) == 1

    def test_depth_power_of_two(self):
        assert compute_tree_depth(2) == 2
        assert compute_tree_depth(4) == 3
        assert compute_tree_depth(8) == 4

    def test_depth_non_power_of_two(self):
        assert compute_tree_depth(3) == 3
        assert compute_tree_depth(5) == 4
        assert compute_tree_depth(7) == 4

    def test_depth_matches_built_tree(self, blocks_factory):
        for count in range(1, 20):
            assert build(blocks_factory(count)).depth == compute_tree_depth(count)

    def test_expected_proof_length(self):
        assert expected_proof_length(0) == 0
        assert expected_proof_length(1) == 0
        assert expected_proof_length(4) == 2
        assert expected_proof_length(5) == 3


class TestMerkleParent:
    """Tests for merkle_parent() function."""

    def test_merkle_parent_order_matters(self):
        a = sha256(b"a")
        b = sha256(b"b")

        assert merkle_parent(a, b) != merkle_parent(b, a)

    def test_merkle_parent_equals_sha256_concat(self):
        left = sha256(b"left")
        right = sha256(b"right")

        assert merkle_parent(left, right) == sha256(left + right)


class TestRepr:

    def test_repr_mentions_counts(self, abcd_blocks):
        text = repr(build(abcd_blocks))

        assert "leaf_count=4" in text
        assert "depth=3" in text

    def test_root_hex(self, abcd_blocks):
        tree = build(abcd_blocks)

        assert tree.root_hex == tree.root.hex()


class TestProofType:

    def test_from_pairs_parses_sides(self):
        digest = sha256(b"x")

        proof = MerkleProof.from_pairs(0, [(digest, "right")])

        assert proof.steps == (ProofStep(sibling=digest, side=Side.RIGHT),)
        assert proof.siblings == [digest]
        assert proof.sides == [Side.RIGHT]
