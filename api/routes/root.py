"""
Root Derivation Routes

Derive a Merkle root, or verify one against a recomputation.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from api.deps import decode_leaves, decode_root, get_runtime_config
from api.models.requests import RootRequest, VerifyRequest
from api.models.responses import RootResponse, VerifyResponse
from core.config.runtime import RuntimeConfig
from core.crypto.hashing import canonical_algorithm_name, to_hex
from core.merkle.merkle_tree import MerkleSession, verify_root
from core.merkle.process_types import ProcessType
from core.schemas.errors import ProofMismatchException


logger = logging.getLogger(__name__)

router = APIRouter(tags=["merkle"])


def resolve_arguments(request: RootRequest, config: RuntimeConfig) -> dict[str, Any]:
    """Collect core arguments from a request, filling gaps from config."""
    defaults = config.process
    return {
        "leaves": decode_leaves(request),
        "algorithm": request.algorithm if request.algorithm is not None else defaults.default_algorithm,
        "process_type": (
            request.process_type if request.process_type is not None
            else defaults.default_process_type
        ),
        "initial_hash": (
            request.initial_hash if request.initial_hash is not None
            else defaults.initial_hash
        ),
    }


def resolve_timeout(request: RootRequest, config: RuntimeConfig) -> float:
    """Request deadline, or the configured one when the request gives none."""
    if request.timeout_ms is not None:
        return request.timeout_ms
    return config.process.timeout_ms


@router.post("/root", response_model=RootResponse)
def derive_root_route(
    request: RootRequest,
    config: RuntimeConfig = Depends(get_runtime_config),
) -> RootResponse:
    """
    Derive the Merkle root of the supplied leaves.

    Argument errors come back as 400 with every violation listed;
    a missed deadline comes back as 504.
    """
    session = MerkleSession.open(**resolve_arguments(request, config))
    root = session.run(resolve_timeout(request, config))
    logger.info(
        f"Derived root for {len(session.leaves)} leaves "
        f"({session.current_algorithm}, {session.process_type.label})"
    )
    return RootResponse(
        ok=True,
        root=to_hex(root),
        algorithm=session.current_algorithm,
        process_type=session.process_type.name,
        leaf_count=len(session.leaves),
    )


@router.post("/verify", response_model=VerifyResponse)
def verify_root_route(
    request: VerifyRequest,
    config: RuntimeConfig = Depends(get_runtime_config),
) -> VerifyResponse:
    """
    Recompute the root and compare it with `expected_root`.

    A mismatch is not an error: it is reported with ok=false.
    """
    expected = decode_root(request.expected_root)
    arguments = resolve_arguments(request, config)

    try:
        root = verify_root(
            expected_root=expected,
            timeout_ms=resolve_timeout(request, config),
            **arguments,
        )
        match = True
    except ProofMismatchException as e:
        logger.info(f"Root mismatch: expected {e.details['expected']}, got {e.details['actual']}")
        root = e.actual
        match = False

    return VerifyResponse(
        ok=match,
        match=match,
        root=to_hex(root),
        expected_root=to_hex(expected),
        algorithm=canonical_algorithm_name(arguments["algorithm"]),
        process_type=ProcessType.parse(arguments["process_type"]).name,
    )
