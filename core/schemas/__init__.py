"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy shared by all modules.
Proof document models live in core.schemas.proof and are imported
from there directly, since they depend on core.merkle.
"""

from .errors import (
    ArborError,
    ArborException,
    ConfigException,
    EmptyTreeException,
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidDigestException,
    MalformedProofException,
    SchemaValidationException,
    UnsupportedHashException,
)

__all__ = [
    "ArborError",
    "ArborException",
    "ConfigException",
    "EmptyTreeException",
    "ErrorCodes",
    "IndexOutOfRangeException",
    "InvalidDigestException",
    "MalformedProofException",
    "SchemaValidationException",
    "UnsupportedHashException",
]
