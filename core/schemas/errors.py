"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for Merkle root derivation.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    MERKLE_ERROR = "MERKLE_ERROR"

    # Argument Validation Errors
    ARGUMENT_ERROR = "ARGUMENT_ERROR"
    EMPTY_INPUT = "EMPTY_INPUT"
    UNKNOWN_ALGORITHM = "UNKNOWN_ALGORITHM"
    INVALID_PROCESS_TYPE = "INVALID_PROCESS_TYPE"
    INVALID_LEAF = "INVALID_LEAF"

    # Execution Errors
    PROCESS_TIMED_OUT = "PROCESS_TIMED_OUT"

    # Verification Errors
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Serialization Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used when errors cross a serialization boundary (API responses,
    CLI JSON output) instead of being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried (with a larger budget)",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raised exception."""
        return MerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all Merkle root derivation errors.

    This exception carries structured error information and can be
    converted to/from MerkleError models.
    """

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.MERKLE_ERROR,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(MerkleException):
    """Raised when no leaves are supplied."""

    def __init__(self, message: str = "no leaves given") -> None:
        super().__init__(message=message, code=ErrorCodes.EMPTY_INPUT)


class UnknownAlgorithmException(MerkleException):
    """Raised when a hash algorithm name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"unknown hash algorithm: {name}",
            code=ErrorCodes.UNKNOWN_ALGORITHM,
            details={"algorithm": name},
        )
        self.name = name


class InvalidProcessTypeException(MerkleException):
    """Raised when the process type is not one of the known strategies."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            message=f"invalid process type: {value!r}",
            code=ErrorCodes.INVALID_PROCESS_TYPE,
            details={"process_type": repr(value)},
        )
        self.value = value


class InvalidLeafException(MerkleException):
    """Raised when a leaf is not a bytes-like value."""

    def __init__(self, index: int, type_name: str) -> None:
        super().__init__(
            message=f"leaf {index} is not bytes-like (got {type_name})",
            code=ErrorCodes.INVALID_LEAF,
            details={"index": index, "type": type_name},
        )
        self.index = index


class ArgumentException(MerkleException):
    """
    Aggregated validation error.

    Carries every violation found while validating a request, so callers
    see all problems at once instead of fixing them one at a time.
    """

    def __init__(self, violations: list[MerkleException]) -> None:
        summary = "; ".join(v.message for v in violations)
        super().__init__(
            message=f"argument error(s) - {summary}",
            code=ErrorCodes.ARGUMENT_ERROR,
            details={
                "violations": [
                    v.to_error_model().model_dump() for v in violations
                ],
            },
        )
        self.violations = list(violations)

    @property
    def codes(self) -> list[str]:
        """Error codes of the individual violations, in detection order."""
        return [v.code for v in self.violations]


class ProcessTimedOutException(MerkleException):
    """Raised when a reduction does not finish within its deadline."""

    def __init__(self, timeout_ms: float, process: str | None = None) -> None:
        details: dict[str, Any] = {"timeout_ms": timeout_ms}
        if process:
            details["process"] = process
        super().__init__(
            message=f"timed out: process did not finish within {timeout_ms} ms",
            code=ErrorCodes.PROCESS_TIMED_OUT,
            details=details,
            retryable=True,
        )
        self.timeout_ms = timeout_ms


class ProofMismatchException(MerkleException):
    """Raised when a recomputed root does not match the supplied root."""

    def __init__(self, expected: bytes, actual: bytes) -> None:
        super().__init__(
            message="recomputed root does not match expected root",
            code=ErrorCodes.ROOT_MISMATCH,
            details={"expected": expected.hex(), "actual": actual.hex()},
        )
        self.expected = expected
        self.actual = actual


class CanonicalizationException(MerkleException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )
