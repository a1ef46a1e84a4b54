"""
Test fixtures package for Merkle root tests.

This package provides factory functions and known vectors:
- common.py: leaf factories and the "I want proof right now" roots

Usage:
    from fixtures.common import make_leaves, make_proof_leaves, PROOF_ROOTS
"""

from .common import (
    PROOF_ROOTS,
    PROOF_SENTENCE,
    make_leaves,
    make_proof_leaves,
)

__all__ = [
    "PROOF_ROOTS",
    "PROOF_SENTENCE",
    "make_leaves",
    "make_proof_leaves",
]
