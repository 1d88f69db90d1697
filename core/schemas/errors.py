"""
Schemas - Errors
File: errors.py

Purpose: Standard error taxonomy for Merkle commitments.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree Errors
    EMPTY_TREE = "EMPTY_TREE"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Digest & Proof Errors
    INVALID_DIGEST = "INVALID_DIGEST"
    MALFORMED_PROOF = "MALFORMED_PROOF"
    UNSUPPORTED_HASH = "UNSUPPORTED_HASH"

    # Schema & Configuration Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class ArborError(BaseModel):
    """
    Base error model for structured error communication.

    Used by hosts (CLI, HTTP API) to report errors without raising,
    enabling structured error handling and serialization.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_TREE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "ArborException":
        """Convert this error model to a raised exception."""
        return ArborException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ArborException(Exception):
    """
    Base exception for all Arbor errors.

    Carries structured error information and can be
    converted to/from ArborError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "ARBOR_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> ArborError:
        """Convert this exception to an ArborError model."""
        return ArborError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyTreeException(ArborException):
    """Raised when reading the root of a tree built from zero blocks."""

    def __init__(self, message: str = "Merkle tree is empty; root is undefined") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_TREE,
        )


class IndexOutOfRangeException(ArborException, IndexError):
    """Raised when a proof is requested for a leaf index outside the tree."""

    def __init__(
        self,
        leaf_index: int,
        leaf_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["leaf_index"] = leaf_index
        full_details["leaf_count"] = leaf_count
        super().__init__(
            message=f"Leaf index {leaf_index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
        )


class InvalidDigestException(ArborException, ValueError):
    """Raised when a digest has the wrong size or cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_DIGEST,
            details=details,
        )


class MalformedProofException(ArborException, ValueError):
    """Raised when a proof is structurally unusable for verification."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
        )


class UnsupportedHashException(ArborException, ValueError):
    """Raised when an unknown hash algorithm name is requested."""

    def __init__(self, algorithm: str, supported: list[str] | None = None) -> None:
        super().__init__(
            message=f"Unsupported hash algorithm: {algorithm}",
            code=ErrorCodes.UNSUPPORTED_HASH,
            details={"algorithm": algorithm, "supported": supported or []},
        )


class SchemaValidationException(ArborException):
    """Raised when an external document fails schema validation."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
        )


class ConfigException(ArborException):
    """Raised when configuration values are invalid."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=details,
        )
