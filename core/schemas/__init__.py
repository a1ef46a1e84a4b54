"""
Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)

# Error models and exceptions
from .errors import (
    ArgumentException,
    CanonicalizationException,
    EmptyInputException,
    ErrorCodes,
    InvalidLeafException,
    InvalidProcessTypeException,
    MerkleError,
    MerkleException,
    ProcessTimedOutException,
    ProofMismatchException,
    UnknownAlgorithmException,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Errors
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "ArgumentException",
    "EmptyInputException",
    "UnknownAlgorithmException",
    "InvalidProcessTypeException",
    "InvalidLeafException",
    "ProcessTimedOutException",
    "ProofMismatchException",
    "CanonicalizationException",
]
