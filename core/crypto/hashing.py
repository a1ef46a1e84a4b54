"""
Hash Function Provider
Registry of the hash algorithms available for Merkle root derivation.

This module provides:
- Pure hash functions (bytes -> bytes) for every supported algorithm
- A process-wide, read-only name -> function registry
- Case-insensitive lookup with legacy alias support
- The sorted algorithm listing (as a list and as canonical JSON)
- Hex encoding/decoding with 0x prefix

Determinism Notes:
- Every registered function is stateless and side-effect free
- The registry is frozen at import time and never mutated afterwards
"""
from __future__ import annotations

import hashlib
from types import MappingProxyType
from typing import Callable, Mapping

from core.schemas.canonical import dumps_canonical
from core.schemas.errors import UnknownAlgorithmException


HashFunction = Callable[[bytes], bytes]


def nop(data: bytes) -> bytes:
    """Identity hash: returns the input unchanged."""
    return bytes(data)


def md5(data: bytes) -> bytes:
    """Compute MD5 digest (16 bytes)."""
    return hashlib.md5(data).digest()


def sha1(data: bytes) -> bytes:
    """Compute SHA-1 digest (20 bytes)."""
    return hashlib.sha1(data).digest()


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha512(data: bytes) -> bytes:
    """Compute SHA-512 digest (64 bytes)."""
    return hashlib.sha512(data).digest()


def sha512_256(data: bytes) -> bytes:
    """Compute SHA-512/256, the FIPS 180-4 truncated variant (32 bytes)."""
    return hashlib.new("sha512_256", data).digest()


def sha3_256(data: bytes) -> bytes:
    """Compute SHA3-256 digest (32 bytes)."""
    return hashlib.sha3_256(data).digest()


ALGORITHM_REGISTRY: Mapping[str, HashFunction] = MappingProxyType({
    "NOP": nop,
    "MD5": md5,
    "SHA1": sha1,
    "SHA256": sha256,
    "SHA512": sha512,
    "SHA512_256": sha512_256,
    "SHA3_256": sha3_256,
})

# Names used by earlier releases; resolvable but not listed.
ALGORITHM_ALIASES: Mapping[str, str] = MappingProxyType({
    "SHA256SUM256": "SHA256",
    "SHA512SUM256": "SHA512_256",
    "SHA512SUM512": "SHA512",
    "SHA3SUM256": "SHA3_256",
})

# Output length in bytes; None where the output length follows the input.
_DIGEST_SIZES: Mapping[str, int | None] = MappingProxyType({
    "NOP": None,
    "MD5": 16,
    "SHA1": 20,
    "SHA256": 32,
    "SHA512": 64,
    "SHA512_256": 32,
    "SHA3_256": 32,
})


def canonical_algorithm_name(name: str) -> str:
    """
    Normalize an algorithm name to its registry key.

    Uppercases, maps '-' to '_' and resolves legacy aliases. The result
    is not guaranteed to be registered; use lookup_algorithm for that.

    Example:
        >>> canonical_algorithm_name("sha3-256")
        'SHA3_256'
        >>> canonical_algorithm_name("sha256sum256")
        'SHA256'
    """
    key = name.strip().upper().replace("-", "_")
    return ALGORITHM_ALIASES.get(key, key)


def is_supported(name: str) -> bool:
    """Check whether an algorithm name resolves in the registry."""
    if not isinstance(name, str):
        return False
    return canonical_algorithm_name(name) in ALGORITHM_REGISTRY


def lookup_algorithm(name: str) -> HashFunction:
    """
    Resolve an algorithm name to its hash function.

    Args:
        name: Algorithm name, matched case-insensitively

    Returns:
        The registered hash function

    Raises:
        UnknownAlgorithmException: If the name is not registered
    """
    if not isinstance(name, str):
        raise UnknownAlgorithmException(repr(name))
    try:
        return ALGORITHM_REGISTRY[canonical_algorithm_name(name)]
    except KeyError:
        raise UnknownAlgorithmException(name) from None


def digest_size(name: str) -> int | None:
    """
    Output length in bytes of the named algorithm.

    Returns None for NOP, whose output is as long as its input.

    Raises:
        UnknownAlgorithmException: If the name is not registered
    """
    lookup_algorithm(name)
    return _DIGEST_SIZES[canonical_algorithm_name(name)]


def list_algorithms() -> list[str]:
    """Return all registered algorithm names in lexicographic order."""
    return sorted(ALGORITHM_REGISTRY)


def available_algorithms() -> str:
    """
    Return the algorithm listing as canonical JSON.

    Example:
        >>> available_algorithms()
        '{"algorithms":["MD5","NOP","SHA1","SHA256","SHA3_256","SHA512","SHA512_256"]}'
    """
    return dumps_canonical({"algorithms": list_algorithms()})


def hash_concat(hash_func: HashFunction, left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is the Merkle "combine" step: hash_func(left + right), a single
    hash application over the raw concatenation.
    """
    return hash_func(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HashFunction",
    "ALGORITHM_REGISTRY",
    "ALGORITHM_ALIASES",
    "nop",
    "md5",
    "sha1",
    "sha256",
    "sha512",
    "sha512_256",
    "sha3_256",
    "canonical_algorithm_name",
    "is_supported",
    "lookup_algorithm",
    "digest_size",
    "list_algorithms",
    "available_algorithms",
    "hash_concat",
    "to_hex",
    "from_hex",
]
