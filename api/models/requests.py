"""
API Request Models

Pydantic models for API request validation.
"""

from typing import Literal

from pydantic import BaseModel, Field

from core.schemas.proof import ProofDocument


BlockEncoding = Literal["utf-8", "hex"]


class BlocksRequest(BaseModel):
    """Request body for POST /root."""

    blocks: list[str] = Field(
        ...,
        description="Ordered data blocks, encoded as given by `encoding`",
    )
    encoding: BlockEncoding = Field(
        default="utf-8",
        description="How each block string maps to bytes",
    )
    hash_algorithm: str | None = Field(
        default=None,
        description="Hash function name (default: server configuration)",
    )


class ProveRequest(BlocksRequest):
    """Request body for POST /prove."""

    index: int = Field(..., description="0-based index of the block to prove")


class VerifyRequest(BaseModel):
    """Request body for POST /verify."""

    block: str = Field(..., description="The block being proven")
    encoding: BlockEncoding = Field(default="utf-8")
    proof: ProofDocument = Field(..., description="Proof document from POST /prove")
    root: str | None = Field(
        default=None,
        description="Expected root as hex (default: root recorded in the proof)",
    )
