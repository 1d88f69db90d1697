"""
Schemas - Proof Documents
File: proof.py

Purpose: JSON-friendly representation of inclusion proofs for hosts
that store or transmit them (CLI proof files, HTTP API bodies).
Digests are lowercase hex; sides are "left" / "right".
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from core.crypto.hashing import DEFAULT_HASH_ALGORITHM, digest_from_hex, to_hex
from core.merkle.merkle_proofs import MerkleProof, ProofStep, Side
from core.merkle.merkle_tree import expected_proof_length
from core.schemas.errors import InvalidDigestException, SchemaValidationException


PROOF_DOCUMENT_VERSION = "v1"


def _validate_digest_hex(value: str) -> str:
    try:
        return to_hex(digest_from_hex(value))
    except InvalidDigestException as e:
        raise ValueError(e.message) from e


class ProofStepModel(BaseModel):
    """One proof step with a hex sibling digest."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: str = Field(..., description="Hex-encoded sibling digest")
    side: Literal["left", "right"] = Field(..., description="Sibling operand position")

    @field_validator("sibling")
    @classmethod
    def _check_sibling(cls, v: str) -> str:
        return _validate_digest_hex(v)

    def to_step(self) -> ProofStep:
        return ProofStep(sibling=bytes.fromhex(self.sibling), side=Side(self.side))


class ProofDocument(BaseModel):
    """
    Self-describing inclusion proof.

    Carries the claimed root and the hash algorithm name alongside the
    steps so a verifier needs only this document and the block.
    """

    model_config = ConfigDict(extra="forbid")

    version: str = Field(default=PROOF_DOCUMENT_VERSION)
    hash_algorithm: str = Field(default=DEFAULT_HASH_ALGORITHM)
    leaf_index: int = Field(..., ge=0, description="0-based index of the proven leaf")
    leaf_count: int | None = Field(default=None, ge=1, description="Number of leaves in the tree")
    root: str = Field(..., description="Hex-encoded Merkle root")
    steps: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("root")
    @classmethod
    def _check_root(cls, v: str) -> str:
        return _validate_digest_hex(v)

    @model_validator(mode="after")
    def _check_against_leaf_count(self) -> "ProofDocument":
        """When leaf_count is recorded, the index and step count must fit that tree."""
        if self.leaf_count is None:
            return self
        if self.leaf_index >= self.leaf_count:
            raise ValueError(
                f"leaf_index {self.leaf_index} out of range for leaf_count {self.leaf_count}"
            )
        expected = expected_proof_length(self.leaf_count)
        if len(self.steps) != expected:
            raise ValueError(
                f"Tree of {self.leaf_count} leaves needs {expected} proof steps, "
                f"got {len(self.steps)}"
            )
        return self

    @classmethod
    def from_proof(
        cls,
        proof: MerkleProof,
        root: bytes,
        leaf_count: int | None = None,
        hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    ) -> "ProofDocument":
        """Wrap a MerkleProof and its root into a document."""
        return cls(
            hash_algorithm=hash_algorithm,
            leaf_index=proof.leaf_index,
            leaf_count=leaf_count,
            root=to_hex(root),
            steps=[
                ProofStepModel(sibling=to_hex(step.sibling), side=step.side.value)
                for step in proof.steps
            ],
        )

    @classmethod
    def from_json(cls, data: str | bytes) -> "ProofDocument":
        """
        Parse a JSON proof document.

        Raises:
            SchemaValidationException: If the document is invalid
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            errors = e.errors()
            field_path = ".".join(str(p) for p in errors[0]["loc"]) if errors else None
            raise SchemaValidationException(
                f"Invalid proof document: {errors[0]['msg'] if errors else e}",
                field_path=field_path,
                details={"error_count": len(errors)},
            ) from e

    def to_proof(self) -> MerkleProof:
        return MerkleProof(
            leaf_index=self.leaf_index,
            steps=tuple(step.to_step() for step in self.steps),
        )

    def root_bytes(self) -> bytes:
        return bytes.fromhex(self.root)


__all__ = [
    "PROOF_DOCUMENT_VERSION",
    "ProofStepModel",
    "ProofDocument",
]
