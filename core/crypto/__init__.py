"""
Core cryptographic utilities.

Hash function registry and hex helpers used by Merkle root derivation.
"""
from .hashing import (
    ALGORITHM_ALIASES,
    ALGORITHM_REGISTRY,
    HashFunction,
    available_algorithms,
    canonical_algorithm_name,
    digest_size,
    from_hex,
    hash_concat,
    is_supported,
    list_algorithms,
    lookup_algorithm,
    sha256,
    to_hex,
)

__all__ = [
    "ALGORITHM_ALIASES",
    "ALGORITHM_REGISTRY",
    "HashFunction",
    "available_algorithms",
    "canonical_algorithm_name",
    "digest_size",
    "from_hex",
    "hash_concat",
    "is_supported",
    "list_algorithms",
    "lookup_algorithm",
    "sha256",
    "to_hex",
]
