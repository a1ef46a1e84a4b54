"""API request and response models."""

from api.models.requests import RootRequest, VerifyRequest
from api.models.responses import (
    AlgorithmsResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    RootResponse,
    VerifyResponse,
)

__all__ = [
    "RootRequest",
    "VerifyRequest",
    "AlgorithmsResponse",
    "HealthResponse",
    "RootResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]
