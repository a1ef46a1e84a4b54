"""
CLI Config Command

Usage:
    merkle config --init [--path merkle.json]
    merkle config --show
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from merkle_cli.config import get_default_config_template


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def config_cmd(args: Namespace) -> int:
    """Write a template config file, or print the effective configuration."""
    if args.init:
        target = Path(args.path)
        if target.exists():
            print(f"Error: Config file already exists: {target}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        target.write_text(get_default_config_template())
        print(f"Created configuration file: {target}")
        print("Environment variables (MERKLE_* prefix) override its values.")
        return EXIT_SUCCESS

    if args.show:
        # effective config: file values with environment overrides applied
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: merkle config [--init|--show]")
    return EXIT_SUCCESS
