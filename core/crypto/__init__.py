"""
Core cryptographic utilities.

Provides the fixed-size hash functions used for Merkle commitments.
"""
from .hashing import (
    DIGEST_SIZE,
    DEFAULT_HASH_ALGORITHM,
    HASH_FUNCTIONS,
    HashFn,
    sha256,
    sha3_256,
    blake2b_256,
    get_hash_fn,
    hash_concat,
    ensure_digest,
    to_hex,
    from_hex,
    digest_from_hex,
)

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
