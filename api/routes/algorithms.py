"""
Algorithms Route

Discovery endpoint for the supported hash algorithms.
"""

from __future__ import annotations

from fastapi import APIRouter

from api.models.responses import AlgorithmsResponse
from core.crypto.hashing import list_algorithms


router = APIRouter(tags=["algorithms"])


@router.get("/algorithms", response_model=AlgorithmsResponse)
async def get_algorithms() -> AlgorithmsResponse:
    """Return every supported hash algorithm, sorted ascending."""
    return AlgorithmsResponse(algorithms=list_algorithms())
