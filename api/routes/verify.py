"""
Verify Route

Verify a block against an inclusion proof.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import decode_block
from api.models.requests import VerifyRequest
from api.models.responses import VerifyResponse
from core.crypto.hashing import digest_from_hex, get_hash_fn, to_hex
from core.merkle import verify_proof


logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


@router.post("/verify", response_model=VerifyResponse)
async def verify_block(request: VerifyRequest) -> VerifyResponse:
    """
    Recompute the root from the block and proof and compare.

    A root mismatch is a normal result (verified=false), not an error.
    Structurally invalid proofs are rejected with MALFORMED_PROOF.
    """
    document = request.proof
    hash_fn = get_hash_fn(document.hash_algorithm)
    expected_root = (
        digest_from_hex(request.root, "root") if request.root else document.root_bytes()
    )

    verified = verify_proof(
        decode_block(request.block, request.encoding),
        document.leaf_index,
        document.to_proof(),
        expected_root,
        hash_fn,
    )
    if not verified:
        logger.info(f"Verification failed for leaf {document.leaf_index}")

    return VerifyResponse(
        verified=verified,
        leaf_index=document.leaf_index,
        root=to_hex(expected_root),
    )
