"""
Common test fixtures shared by all modules.

Provides leaf factories and the fixed root vectors every strategy must
reproduce byte for byte.
"""

from core.crypto.hashing import sha256
from core.merkle.process_types import ProcessType


PROOF_SENTENCE = "I want proof right now"

# SHA256 roots over sha256(word) for each word of PROOF_SENTENCE
PROOF_ROOTS: dict[ProcessType, str] = {
    ProcessType.DUPE_APPEND: "7c6aed8b3a1f18ad143ef5911302666c758a41d1588141e46a08e44561bcd582",
    ProcessType.PASS_THROUGH: "e0934a80a459a7c2256d7eef4a819d4be23b12ed59147acb981fe2e65ecc97db",
    ProcessType.BINARY_TREE: "84d54d7074b373c94fd43e8fb1d78b7fd1925aadff0f2bf90ef1c66d5462f24f",
}


def make_proof_leaves() -> list[bytes]:
    """SHA-256 of each word of the proof sentence."""
    return [sha256(word.encode()) for word in PROOF_SENTENCE.split(" ")]


def make_leaves(count: int, prefix: str = "leaf") -> list[bytes]:
    """Distinct 32-byte leaves."""
    return [sha256(f"{prefix}{i}".encode()) for i in range(count)]
