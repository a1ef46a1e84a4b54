"""
API Request Models

Pydantic models for API request validation.
"""

from typing import Literal

from pydantic import BaseModel, Field


class RootRequest(BaseModel):
    """Request body for POST /root endpoint."""

    leaves: list[str] = Field(
        ...,
        max_length=1_000_000,
        description="Ordered leaves: 0x-prefixed hex, or text when leaf_encoding is utf-8",
    )
    algorithm: str | None = Field(
        default=None,
        description="Hash algorithm name (case-insensitive); defaults to server config",
    )
    process_type: int | str | None = Field(
        default=None,
        description="Process type: 0/1/2, a name (PASS_THROUGH) or label (PAS-THRU)",
    )
    initial_hash: bool | None = Field(
        default=None,
        description="Hash each leaf once before building the tree",
    )
    leaf_encoding: Literal["hex", "utf-8"] = Field(
        default="hex",
        description="How leaf strings are turned into bytes",
    )
    timeout_ms: float | None = Field(
        default=None,
        gt=0,
        le=60_000,
        description="Deadline for the reduction in milliseconds",
    )


class VerifyRequest(RootRequest):
    """Request body for POST /verify endpoint."""

    expected_root: str = Field(
        ...,
        description="Root to compare against, 0x-prefixed hex",
    )
