"""
Merkle Process Types
The three strategies for balancing an odd number of siblings at a tree level.
"""
from __future__ import annotations

import re
from enum import IntEnum
from typing import Any

from core.schemas.errors import InvalidProcessTypeException


# optional minus sign, ASCII digits only
_INTEGER = re.compile(r"-?[0-9]+")


class ProcessType(IntEnum):
    """
    Level reduction strategy.

    PASS_THROUGH: an unpaired trailing node is carried up unchanged
    DUPE_APPEND:  an unpaired trailing node is duplicated and paired with itself
    BINARY_TREE:  the leaf count is first aligned to a power of two
    """

    PASS_THROUGH = 0
    DUPE_APPEND = 1
    BINARY_TREE = 2

    @property
    def label(self) -> str:
        """Short label used in logs and error details."""
        return _LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> "ProcessType":
        """
        Resolve a process type from its enum member, integer value,
        name (case-insensitive) or label.

        Raises:
            InvalidProcessTypeException: If the value names no strategy
        """
        if isinstance(value, cls):
            return value
        # bool is an int subclass; True must not select DUPE_APPEND
        if isinstance(value, bool):
            raise InvalidProcessTypeException(value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidProcessTypeException(value) from None
        if isinstance(value, str):
            key = value.strip().upper()
            if _INTEGER.fullmatch(key):
                return cls.parse(int(key))
            normalized = key.replace("-", "_")
            if normalized in cls.__members__:
                return cls[normalized]
            for member, label in _LABELS.items():
                if key == label:
                    return member
        raise InvalidProcessTypeException(value)


_LABELS: dict[ProcessType, str] = {
    ProcessType.PASS_THROUGH: "PAS-THRU",
    ProcessType.DUPE_APPEND: "DUP-APND",
    ProcessType.BINARY_TREE: "BIN-TREE",
}


__all__ = ["ProcessType"]
