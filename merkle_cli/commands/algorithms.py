"""
CLI Algorithms Command

Usage:
    merkle algorithms
"""

from __future__ import annotations

from argparse import Namespace

from core.crypto.hashing import available_algorithms


EXIT_SUCCESS = 0


def algorithms_cmd(args: Namespace) -> int:
    """Print the supported hash algorithms as JSON."""
    print(available_algorithms())
    return EXIT_SUCCESS
