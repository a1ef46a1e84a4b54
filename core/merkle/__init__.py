"""
Merkle Root Derivation
Deterministic Merkle root computation with selectable balancing strategies.

This module provides:
- ProcessType: the three level reduction strategies
- derive_root: compute a root from ordered leaf hashes
- verify_root: recompute a root and compare it to an expected one
- MerkleSession: state of a single derivation call
- Level reducers and the deadline supervisor they run under

Canonical Commitment Rules:
1. Leaf preprocessing (optional): leaf = hash(leaf), exactly once
2. Parent hashing: parent = hash(left + right)
3. Odd levels: carried through, duplicated, or aligned to a power of two
   depending on ProcessType
4. Empty input: rejected (EmptyInputException inside ArgumentException)

Usage:
    from core.merkle import derive_root, ProcessType
    from core.crypto import sha256

    leaves = [sha256(word.encode()) for word in "I want proof right now".split()]
    root = derive_root(leaves, "SHA256", ProcessType.BINARY_TREE)
"""
from .process_types import ProcessType

from .reducers import (
    REDUCERS,
    binary_start_index,
    binary_tree,
    duplicate_and_append,
    next_power_of_two,
    pair_level,
    pass_through,
)

from .supervisor import run_with_deadline

from .merkle_tree import (
    MerkleSession,
    derive_root,
    validate_request,
    verify_root,
)


__all__ = [
    # Core types
    "ProcessType",
    "MerkleSession",
    # Entry points
    "derive_root",
    "verify_root",
    "validate_request",
    # Reducers
    "REDUCERS",
    "pass_through",
    "duplicate_and_append",
    "binary_tree",
    "pair_level",
    "next_power_of_two",
    "binary_start_index",
    # Supervisor
    "run_with_deadline",
]
