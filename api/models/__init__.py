"""API request and response models."""

from api.models.requests import BlocksRequest, ProveRequest, VerifyRequest
from api.models.responses import (
    HealthResponse,
    RootResponse,
    ProveResponse,
    VerifyResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "BlocksRequest",
    "ProveRequest",
    "VerifyRequest",
    "HealthResponse",
    "RootResponse",
    "ProveResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]
