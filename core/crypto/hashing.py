"""
Crypto - Hashing Utilities
Fixed-size hashing primitives for Merkle commitments.

This module provides:
- SHA-256 hashing for raw bytes (the default HashFn)
- Named 32-byte hash functions (sha256, sha3_256, blake2b_256)
- Digest validation and hex encoding/decoding

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Every supported function yields exactly DIGEST_SIZE bytes
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Callable

from core.schemas.errors import InvalidDigestException, UnsupportedHashException


# Size in bytes of every digest handled by the tree
DIGEST_SIZE: int = 32

HashFn = Callable[[bytes], bytes]


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha3_256(data: bytes) -> bytes:
    """Compute SHA3-256 hash of raw bytes."""
    return hashlib.sha3_256(data).digest()


def blake2b_256(data: bytes) -> bytes:
    """Compute BLAKE2b hash of raw bytes truncated by parameter to 32 bytes."""
    return hashlib.blake2b(data, digest_size=DIGEST_SIZE).digest()


HASH_FUNCTIONS: dict[str, HashFn] = {
    "sha256": sha256,
    "sha3_256": sha3_256,
    "blake2b_256": blake2b_256,
}

DEFAULT_HASH_ALGORITHM = "sha256"


def get_hash_fn(name: str) -> HashFn:
    """
    Look up a 32-byte hash function by name.

    Names are case-insensitive; "-" is accepted in place of "_".

    Raises:
        UnsupportedHashException: If the name is unknown
    """
    key = name.strip().lower().replace("-", "_")
    try:
        return HASH_FUNCTIONS[key]
    except KeyError:
        raise UnsupportedHashException(name, sorted(HASH_FUNCTIONS)) from None


def hash_concat(left: bytes, right: bytes, hash_fn: HashFn = sha256) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is used for computing Merkle parent hashes:
    parent = hash_fn(left + right)

    Args:
        left: Left child digest
        right: Right child digest
        hash_fn: Hash function to apply (default SHA-256)

    Returns:
        32-byte digest of concatenation
    """
    return hash_fn(left + right)


def ensure_digest(value: bytes, label: str = "digest") -> bytes:
    """
    Check that a value is a DIGEST_SIZE-byte sequence and return it as bytes.

    Raises:
        InvalidDigestException: If the value is not bytes-like or has the wrong size
    """
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise InvalidDigestException(
            f"{label} must be bytes, got {type(value).__name__}",
            details={"label": label},
        )
    value = bytes(value)
    if len(value) != DIGEST_SIZE:
        raise InvalidDigestException(
            f"{label} must be {DIGEST_SIZE} bytes, got {len(value)}",
            details={"label": label, "size": len(value)},
        )
    return value


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string.

    Example:
        >>> to_hex(bytes.fromhex("DEADBEEF"))
        'deadbeef'
    """
    return data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    An optional 0x prefix is accepted; case is ignored.

    Raises:
        InvalidDigestException: If the string has odd length or
                                contains invalid hex characters
    """
    hex_content = hex_string.strip()
    if hex_content[:2].lower() == "0x":
        hex_content = hex_content[2:]

    if len(hex_content) % 2 != 0:
        raise InvalidDigestException(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise InvalidDigestException(f"Invalid hex characters in string: {e}") from e


def digest_from_hex(hex_string: str, label: str = "digest") -> bytes:
    """Decode a hex string and check that it is a DIGEST_SIZE-byte digest."""
    return ensure_digest(from_hex(hex_string), label)


__all__ = [
    "DIGEST_SIZE",
    "DEFAULT_HASH_ALGORITHM",
    "HASH_FUNCTIONS",
    "HashFn",
    "sha256",
    "sha3_256",
    "blake2b_256",
    "get_hash_fn",
    "hash_concat",
    "ensure_digest",
    "to_hex",
    "from_hex",
    "digest_from_hex",
]
