"""
CLI command modules.
"""

from merkle_cli.commands import algorithms, config, root

__all__ = ["algorithms", "config", "root"]
