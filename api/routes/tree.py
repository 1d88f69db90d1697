"""
Tree Routes

Compute Merkle roots and inclusion proofs for submitted blocks.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import decode_blocks, resolve_hash_algorithm
from api.models.requests import BlocksRequest, ProveRequest
from api.models.responses import ProveResponse, RootResponse
from core.crypto.hashing import get_hash_fn, to_hex
from core.merkle import MerkleTree
from core.schemas.proof import ProofDocument


logger = logging.getLogger(__name__)

router = APIRouter(tags=["tree"])


def _build_tree(request: BlocksRequest) -> tuple[MerkleTree, str]:
    algorithm = resolve_hash_algorithm(request.hash_algorithm)
    hash_fn = get_hash_fn(algorithm)
    blocks = decode_blocks(request.blocks, request.encoding)
    return MerkleTree.build(blocks, hash_fn), algorithm


@router.post("/root", response_model=RootResponse)
async def compute_root(request: BlocksRequest) -> RootResponse:
    """
    Compute the Merkle root of the submitted blocks.

    An empty block list has no root and is rejected with EMPTY_TREE.
    """
    tree, algorithm = _build_tree(request)
    root = tree.root
    logger.info(f"Computed root over {tree.leaf_count} blocks ({algorithm})")

    return RootResponse(
        hash_algorithm=algorithm,
        leaf_count=tree.leaf_count,
        depth=tree.depth,
        root=to_hex(root),
    )


@router.post("/prove", response_model=ProveResponse)
async def generate_proof(request: ProveRequest) -> ProveResponse:
    """
    Generate an inclusion proof for the block at `index`.

    An index outside the block list is rejected with INDEX_OUT_OF_RANGE.
    """
    tree, algorithm = _build_tree(request)
    proof = tree.prove(request.index)

    return ProveResponse(
        proof=ProofDocument.from_proof(
            proof,
            tree.root,
            leaf_count=tree.leaf_count,
            hash_algorithm=algorithm,
        ),
    )
