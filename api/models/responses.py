"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-root-api"
    version: str = "v1"


class AlgorithmsResponse(BaseModel):
    """Response for GET /algorithms endpoint."""

    algorithms: list[str] = Field(
        default_factory=list,
        description="Supported hash algorithms, sorted ascending",
    )


class RootResponse(BaseModel):
    """Response for POST /root endpoint."""

    ok: bool = Field(..., description="Whether a root was derived")
    root: str = Field(..., description="Merkle root, 0x-prefixed hex")
    algorithm: str = Field(..., description="Canonical algorithm name used")
    process_type: str = Field(..., description="Process type name used")
    leaf_count: int = Field(..., description="Number of input leaves")


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = Field(..., description="Overall verification status")
    match: bool = Field(..., description="Whether the recomputed root equals expected_root")
    root: str = Field(..., description="Recomputed root, 0x-prefixed hex")
    expected_root: str = Field(..., description="Root supplied by the caller")
    algorithm: str = Field(..., description="Canonical algorithm name used")
    process_type: str = Field(..., description="Process type name used")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
