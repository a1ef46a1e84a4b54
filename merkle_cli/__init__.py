"""
Merkle CLI

Command-line interface for Merkle root derivation.

Usage:
    python -m merkle_cli root 0x01... 0x02... --process binary_tree
    python -m merkle_cli root I want proof right now --encoding utf-8 --initial-hash
    python -m merkle_cli verify --expected 0x... 0x01... 0x02...
    python -m merkle_cli algorithms
"""

__version__ = "0.1.0"
