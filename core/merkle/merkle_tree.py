"""
Merkle Root Derivation
Entry point: validate a request, preprocess leaves, reduce under a deadline.

This module provides:
- validate_request: collect every argument violation before any work
- MerkleSession: transient state of one derivation call
- derive_root: compute the root of an ordered sequence of leaves
- verify_root: recompute a root and compare it to an expected one

Usage:
    from core.merkle import derive_root, ProcessType

    root = derive_root(leaves, "SHA256", ProcessType.DUPE_APPEND)

Determinism Notes:
- Identical (leaves, algorithm, process type, initial_hash) always yield
  byte-identical roots
- The caller's leaf sequence is copied and never mutated
- Either a complete root or an exception comes back, never partial state
"""
from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from core.config.runtime import get_default_config
from core.crypto.hashing import (
    HashFunction,
    canonical_algorithm_name,
    lookup_algorithm,
)
from core.merkle.process_types import ProcessType
from core.merkle.reducers import get_reducer
from core.merkle.supervisor import run_with_deadline
from core.schemas.errors import (
    ArgumentException,
    EmptyInputException,
    InvalidLeafException,
    MerkleException,
    ProofMismatchException,
)


logger = logging.getLogger(__name__)

_BYTES_LIKE = (bytes, bytearray, memoryview)


def validate_request(
    leaves: Sequence[Any],
    algorithm: Any,
    process_type: Any,
) -> tuple[str, ProcessType]:
    """
    Validate a derivation request, accumulating all violations.

    Args:
        leaves: Candidate leaf sequence
        algorithm: Candidate algorithm name
        process_type: Candidate process type

    Returns:
        (canonical algorithm name, resolved ProcessType)

    Raises:
        ArgumentException: Carrying every violation found
    """
    violations: list[MerkleException] = []

    if leaves is None or len(leaves) == 0:
        violations.append(EmptyInputException())
    else:
        for index, leaf in enumerate(leaves):
            if not isinstance(leaf, _BYTES_LIKE):
                violations.append(InvalidLeafException(index, type(leaf).__name__))

    algorithm_name = ""
    try:
        lookup_algorithm(algorithm)
        algorithm_name = canonical_algorithm_name(algorithm)
    except MerkleException as e:
        violations.append(e)

    resolved = ProcessType.PASS_THROUGH
    try:
        resolved = ProcessType.parse(process_type)
    except MerkleException as e:
        violations.append(e)

    if violations:
        raise ArgumentException(violations)

    return algorithm_name, resolved


@dataclass
class MerkleSession:
    """
    State of one root derivation call.

    Owns a private copy of the leaves; created at call entry and
    discarded when the call returns.

    Attributes:
        leaves: Private copy of the leaf sequence
        algorithm: Canonical name of the hash algorithm
        hash_func: The resolved hash function
        process_type: The reduction strategy
        initial_hash: Whether leaves are hashed once before reduction
        root: The derived root, once run() has completed
    """
    leaves: list[bytes]
    algorithm: str
    hash_func: HashFunction
    process_type: ProcessType
    initial_hash: bool = False
    root: bytes | None = None
    _encoded: bool = field(default=False, repr=False)

    @classmethod
    def open(
        cls,
        leaves: Sequence[Any],
        algorithm: str,
        process_type: Any,
        initial_hash: bool = False,
    ) -> "MerkleSession":
        """
        Validate a request and build its session.

        Raises:
            ArgumentException: If any argument is invalid
        """
        algorithm_name, resolved = validate_request(leaves, algorithm, process_type)
        return cls(
            leaves=[bytes(leaf) for leaf in leaves],
            algorithm=algorithm_name,
            hash_func=lookup_algorithm(algorithm_name),
            process_type=resolved,
            initial_hash=bool(initial_hash),
        )

    @property
    def current_algorithm(self) -> str:
        """Canonical name of the hash algorithm in use."""
        return self.algorithm

    def encode_leaves(self) -> None:
        """
        Replace every leaf with hash(leaf), exactly once per session.

        Further calls are no-ops, since re-hashing would change the root.
        """
        if self._encoded:
            return
        self.leaves = [self.hash_func(leaf) for leaf in self.leaves]
        self._encoded = True

    def run(self, timeout_ms: float | None = None) -> bytes:
        """
        Derive the root under the supervisor's deadline.

        Args:
            timeout_ms: Deadline override; defaults to the runtime config

        Raises:
            ProcessTimedOutException: If the reduction misses its deadline
        """
        if timeout_ms is None:
            timeout_ms = get_default_config().process.timeout_ms

        if self.initial_hash:
            self.encode_leaves()

        logger.debug(
            f"deriving root: {len(self.leaves)} leaves, "
            f"algorithm={self.algorithm}, process={self.process_type.label}"
        )
        reducer = get_reducer(self.process_type)
        self.root = run_with_deadline(
            reducer,
            list(self.leaves),
            self.hash_func,
            timeout_ms=timeout_ms,
            label=self.process_type.label,
        )
        return self.root


def derive_root(
    leaves: Sequence[bytes],
    algorithm: str,
    process_type: ProcessType | int | str,
    initial_hash: bool = False,
    *,
    timeout_ms: float | None = None,
) -> bytes:
    """
    Compute the Merkle root of an ordered sequence of leaves.

    Args:
        leaves: Leaf hashes (or raw data when initial_hash is set)
        algorithm: Hash algorithm name, case-insensitive
        process_type: ProcessType, its integer value, name or label
        initial_hash: Hash every leaf once before building the tree
        timeout_ms: Deadline override; defaults to the runtime config

    Returns:
        The root hash

    Raises:
        ArgumentException: If leaves, algorithm or process type are invalid
        ProcessTimedOutException: If the reduction misses its deadline

    Example:
        >>> leaves = [sha256(w.encode()) for w in "I want proof right now".split()]
        >>> derive_root(leaves, "SHA256", ProcessType.PASS_THROUGH).hex()[:8]
        'e0934a80'
    """
    session = MerkleSession.open(leaves, algorithm, process_type, initial_hash)
    return session.run(timeout_ms)


def verify_root(
    leaves: Sequence[bytes],
    algorithm: str,
    process_type: ProcessType | int | str,
    expected_root: bytes,
    initial_hash: bool = False,
    *,
    timeout_ms: float | None = None,
) -> bytes:
    """
    Recompute the root of `leaves` and check it against `expected_root`.

    Returns:
        The recomputed root (equal to expected_root)

    Raises:
        ArgumentException: If the request is invalid
        ProcessTimedOutException: If the reduction misses its deadline
        ProofMismatchException: If the recomputed root differs
    """
    root = derive_root(
        leaves,
        algorithm,
        process_type,
        initial_hash,
        timeout_ms=timeout_ms,
    )
    if not hmac.compare_digest(root, bytes(expected_root)):
        raise ProofMismatchException(expected=bytes(expected_root), actual=root)
    return root


__all__ = [
    "MerkleSession",
    "validate_request",
    "derive_root",
    "verify_root",
]
