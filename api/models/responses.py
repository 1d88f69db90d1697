"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.proof import ProofDocument


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "arbor-api"
    version: str = "v1"


class RootResponse(BaseModel):
    """Response for POST /root endpoint."""

    ok: bool = True
    hash_algorithm: str = Field(..., description="Hash function used")
    leaf_count: int = Field(..., description="Number of blocks")
    depth: int = Field(..., description="Number of tree levels")
    root: str = Field(..., description="Hex-encoded Merkle root")


class ProveResponse(BaseModel):
    """Response for POST /prove endpoint."""

    ok: bool = True
    proof: ProofDocument = Field(..., description="Inclusion proof document")


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint. A mismatch is ok=True, verified=False."""

    ok: bool = True
    verified: bool = Field(..., description="Whether the recomputed root matched")
    leaf_index: int
    root: str = Field(..., description="Root the block was checked against")


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
