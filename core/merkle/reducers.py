"""
Merkle Level Reducers
Collapse an ordered sequence of hashes into a single root.

This module provides one reducer per ProcessType:
- pass_through: unpaired trailing node is carried up unchanged
- duplicate_and_append: odd levels duplicate their last node
- binary_tree: first round aligns the level to a power of two

Shared Rules (Hard Contracts):
1. combine(left, right) = hash(left + right), one hash application
2. Node order is preserved; nothing is ever sorted
3. Each level is a freshly built list, the input is never mutated
4. A level always ends with exactly one node, the root

Example, five leaves [a, b, c, d, e]:

    pass_through:          [ab, cd, e] -> [abcd, e] -> [abcde]
    duplicate_and_append:  [a, b, c, d, e, e] -> [ab, cd, ee]
                           -> [ab, cd, ee, ee] -> [abcd, eeee] -> [root]
    binary_tree:           start = 8 - 5 = 3
                           [a, b, c, de] -> [ab, cde] -> [root]
"""
from __future__ import annotations

import logging
from typing import Callable, Sequence

from core.crypto.hashing import HashFunction, hash_concat
from core.merkle.process_types import ProcessType
from core.schemas.errors import EmptyInputException


logger = logging.getLogger(__name__)


Reducer = Callable[[Sequence[bytes], HashFunction], bytes]


def next_power_of_two(n: int) -> int:
    """
    Smallest power of two greater than or equal to n.

    Uses exact integer bit-length arithmetic, so values that already are
    powers of two map to themselves.

    Example:
        >>> [next_power_of_two(n) for n in (1, 2, 3, 4, 5, 8, 9)]
        [1, 2, 4, 4, 8, 8, 16]
    """
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")
    return 1 << (n - 1).bit_length()


def binary_start_index(n: int) -> int:
    """
    First index combined by the binary-tree alignment round.

    Nodes before this index are already aligned and carried up as-is;
    pairing the rest leaves exactly next_power_of_two(n) // 2 nodes.
    """
    return next_power_of_two(n) - n


def pair_level(
    level: Sequence[bytes],
    hash_func: HashFunction,
    start: int = 0,
) -> list[bytes]:
    """
    Build the parent level of `level`.

    Nodes before `start` are copied verbatim. From `start` onwards adjacent
    pairs are combined. A trailing node with no partner is copied as-is.
    """
    next_level: list[bytes] = list(level[:start])
    for index in range(start, len(level), 2):
        if index + 1 >= len(level):
            next_level.append(level[index])
            break
        next_level.append(hash_concat(hash_func, level[index], level[index + 1]))
    return next_level


def _require_leaves(leaves: Sequence[bytes]) -> list[bytes]:
    if len(leaves) == 0:
        raise EmptyInputException()
    return list(leaves)


def pass_through(leaves: Sequence[bytes], hash_func: HashFunction) -> bytes:
    """
    Reduce with the pass-through rule.

    A node that finds no partner is carried into the next level unmodified,
    possibly across several rounds, so leaf depths vary.
    A single leaf is its own root.
    """
    level = _require_leaves(leaves)
    while len(level) > 1:
        level = pair_level(level, hash_func)
    return level[0]


def duplicate_and_append(leaves: Sequence[bytes], hash_func: HashFunction) -> bytes:
    """
    Reduce with the duplicate-and-append rule.

    An odd level gets a copy of its last node appended before pairing.
    At least one round always runs, so a single leaf yields
    hash(leaf + leaf).
    """
    level = _require_leaves(leaves)
    while True:
        if len(level) % 2 == 1:
            level.append(level[-1])
        level = pair_level(level, hash_func)
        if len(level) == 1:
            return level[0]


def binary_tree(leaves: Sequence[bytes], hash_func: HashFunction) -> bytes:
    """
    Reduce as a perfectly balanced binary tree.

    The first round combines only the nodes from binary_start_index(n)
    onwards, leaving a power-of-two level; every later round pairs the
    whole level. A single leaf yields hash(leaf + leaf).
    """
    level = _require_leaves(leaves)
    if len(level) == 1:
        return hash_concat(hash_func, level[0], level[0])

    start = binary_start_index(len(level))
    logger.debug(f"binary tree alignment: {len(level)} leaves, start index {start}")
    level = pair_level(level, hash_func, start)

    while len(level) > 1:
        level = pair_level(level, hash_func)
    return level[0]


REDUCERS: dict[ProcessType, Reducer] = {
    ProcessType.PASS_THROUGH: pass_through,
    ProcessType.DUPE_APPEND: duplicate_and_append,
    ProcessType.BINARY_TREE: binary_tree,
}


def get_reducer(process_type: ProcessType) -> Reducer:
    """Return the reducer registered for a process type."""
    return REDUCERS[process_type]


__all__ = [
    "Reducer",
    "REDUCERS",
    "next_power_of_two",
    "binary_start_index",
    "pair_level",
    "pass_through",
    "duplicate_and_append",
    "binary_tree",
    "get_reducer",
]
