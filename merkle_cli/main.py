"""
CLI Main Entry Point

Usage:
    merkle root [LEAF ...] [--file PATH] [--algorithm A] [--process P]
                [--initial-hash] [--encoding hex|utf-8] [--timeout-ms N] [--json]
    merkle verify [LEAF ...] --expected 0x... [same options]
    merkle algorithms
    merkle config --init | --show

Environment Variables:
    MERKLE_PROCESS_TIMEOUT_MS      Reduction deadline in milliseconds (default: 100)
    MERKLE_DEFAULT_ALGORITHM       Hash algorithm (default: SHA256)
    MERKLE_DEFAULT_PROCESS_TYPE    Process type (default: DUPE_APPEND)
    MERKLE_INITIAL_HASH            Hash leaves before reduction (default: false)
    MERKLE_LOG_LEVEL               Log level (default: INFO)
    MERKLE_LOG_FILE                Also write logs to this file
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merkle_cli import __version__
from merkle_cli.commands import algorithms, config, root
from merkle_cli.config import load_config


EXIT_SUCCESS = root.EXIT_SUCCESS
EXIT_RUNTIME_ERROR = root.EXIT_RUNTIME_ERROR
EXIT_VERIFICATION_FAILED = root.EXIT_VERIFICATION_FAILED

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Send logs to stderr, and to `log_file` when configured."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_derivation_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by the root and verify commands."""
    parser.add_argument(
        "leaves", nargs="*",
        help="Leaves in order (0x-prefixed hex, or text with --encoding utf-8)",
    )
    parser.add_argument("--file", "-f", help="Read more leaves from a file, one per line")
    parser.add_argument("--algorithm", "-a", help="Hash algorithm (default: from config)")
    parser.add_argument(
        "--process", "-p",
        help="pass_through, dupe_append, binary_tree or 0/1/2 (default: from config)",
    )
    hashing = parser.add_mutually_exclusive_group()
    hashing.add_argument(
        "--initial-hash", dest="initial_hash", action="store_true", default=None,
        help="Hash every leaf once before building the tree",
    )
    hashing.add_argument(
        "--no-initial-hash", dest="initial_hash", action="store_false",
        help="Use leaves verbatim",
    )
    parser.add_argument(
        "--encoding", choices=["hex", "utf-8"], default="hex",
        help="How leaves are turned into bytes (default: hex)",
    )
    parser.add_argument(
        "--timeout-ms", type=float,
        help="Reduction deadline in milliseconds (default: from config)",
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON summary")
    parser.add_argument("--debug", action="store_true", help="Print tracebacks on unexpected errors")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle",
        description="Derive and verify Merkle roots.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", "-c", type=Path,
        help="Config file, JSON or YAML (default: ./merkle.json, ./.merkle.json "
             "or ~/.config/merkle/config.json)",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command")

    root_parser = subparsers.add_parser(
        "root",
        help="Derive the Merkle root of a list of leaves",
    )
    _add_derivation_arguments(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    verify_parser = subparsers.add_parser(
        "verify",
        help="Recompute a root and compare it with an expected one",
        description="Exit code 2 when the recomputed root differs from --expected.",
    )
    _add_derivation_arguments(verify_parser)
    verify_parser.add_argument("--expected", "-e", required=True, help="Expected root, 0x-prefixed hex")
    verify_parser.set_defaults(func=root.verify_cmd)

    algorithms_parser = subparsers.add_parser("algorithms", help="List supported hash algorithms")
    algorithms_parser.set_defaults(func=algorithms.algorithms_cmd)

    config_parser = subparsers.add_parser("config", help="Create or show configuration")
    action = config_parser.add_mutually_exclusive_group()
    action.add_argument("--init", action="store_true", help="Write a template config file")
    action.add_argument("--show", action="store_true", help="Print the effective configuration")
    config_parser.add_argument("--path", default="merkle.json", help="Target of --init (default: merkle.json)")
    config_parser.set_defaults(func=config.config_cmd)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        cli_config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or cli_config.log_level, log_file=cli_config.log_file)
    args.cli_config = cli_config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
