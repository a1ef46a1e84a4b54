"""
Schemas - Canonical JSON
File: canonical.py

Byte-stable JSON for everything the service publishes: the algorithm
listing, derived roots and error payloads. Two calls with equal input
always produce the same string.

Mapping rules:
- dict keys sorted, no whitespace between tokens
- None-valued dict entries dropped
- Enum members (including ProcessType) written by name
- bytes/bytearray written as lowercase hex, without 0x
- pydantic models dumped in JSON mode, then mapped like dicts
- NaN and Infinity rejected
"""

import json
import math
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")

_SCALARS = (str, int)


def _child(path: str, key: Any) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else str(key)


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Map a value onto plain JSON types following the rules above.

    Raises:
        CanonicalizationException: On non-finite floats or unsupported types
    """
    # bool and Enum first: both would otherwise match the int branch
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationException(
                message=f"Non-finite float at {path or '<root>'}: {value}",
                details={"path": path, "value": str(value)},
            )
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, BaseModel):
        return canonicalize_value(value.model_dump(mode="json", exclude_none=True), path)
    if isinstance(value, dict):
        return {
            key: canonicalize_value(item, _child(path, key))
            for key, item in value.items()
            if item is not None
        }
    if isinstance(value, (list, tuple)):
        return [canonicalize_value(item, _child(path, i)) for i, item in enumerate(value)]

    type_name = type(value).__name__
    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type_name}",
        details={"path": path, "type": type_name},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize `obj` to its canonical JSON string.

    Example:
        >>> dumps_canonical({"b": 2, "a": [b"\\x01"]})
        '{"a":["01"],"b":2}'
    """
    canonical = canonicalize_value(obj)
    try:
        return json.dumps(
            canonical,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__},
        ) from e


def loads_canonical(json_str: str) -> Any:
    """Parse a canonical JSON string."""
    return json.loads(json_str)
