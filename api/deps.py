"""
API Dependencies

Dependency injection for the API: runtime configuration and request
decoding shared by the routes.
"""

from __future__ import annotations

import logging

from api.errors import InvalidRequestError
from api.models.requests import RootRequest
from core.config.runtime import RuntimeConfig, load_runtime_config
from core.crypto.hashing import from_hex

logger = logging.getLogger(__name__)


def get_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./merkle.json
      2. ./.merkle.json
      3. ~/.config/merkle/config.json

    Environment variables ALWAYS override config file values.
    """
    return load_runtime_config()


def decode_leaves(request: RootRequest) -> list[bytes]:
    """
    Turn request leaf strings into bytes.

    Raises:
        InvalidRequestError: If a hex leaf cannot be decoded
    """
    if request.leaf_encoding == "utf-8":
        return [leaf.encode("utf-8") for leaf in request.leaves]

    leaves: list[bytes] = []
    for index, leaf in enumerate(request.leaves):
        try:
            leaves.append(from_hex(leaf))
        except ValueError as e:
            raise InvalidRequestError(
                f"leaf {index} is not valid hex: {e}",
                details={"index": index},
            ) from e
    return leaves


def decode_root(value: str) -> bytes:
    """
    Decode a 0x-prefixed root.

    Raises:
        InvalidRequestError: If the value is not valid hex
    """
    try:
        return from_hex(value)
    except ValueError as e:
        raise InvalidRequestError(f"expected_root is not valid hex: {e}") from e
