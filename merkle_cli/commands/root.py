"""
CLI Root Commands

Derive a Merkle root from leaves given on the command line or in a file,
or verify one against an expected root.

Usage:
    merkle root 0xaa.. 0xbb.. --algorithm sha256 --process binary_tree
    merkle root --file leaves.txt --encoding utf-8 --initial-hash --json
    merkle verify 0xaa.. 0xbb.. --expected 0x1234..
"""

from __future__ import annotations

import hmac
import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any

from core.config.runtime import RuntimeConfig
from core.crypto.hashing import from_hex, to_hex
from core.merkle.merkle_tree import MerkleSession
from core.schemas.errors import ArgumentException, MerkleException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class RootSummary:
    """Summary of a root derivation for CLI output."""
    root: str = ""
    algorithm: str = ""
    process_type: str = ""
    leaf_count: int = 0
    initial_hash: bool = False
    expected_root: str | None = None
    match: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.expected_root is None:
            del d["expected_root"]
        if self.match is None:
            del d["match"]
        return d


def read_leaves(args: Namespace) -> list[bytes]:
    """
    Collect leaves from positional arguments and --file, in that order.

    Raises:
        ValueError: If a hex leaf cannot be decoded
    """
    raw: list[str] = list(args.leaves or [])
    if args.file:
        text = Path(args.file).read_text(encoding="utf-8")
        raw.extend(line.strip() for line in text.splitlines() if line.strip())

    if args.encoding == "utf-8":
        return [leaf.encode("utf-8") for leaf in raw]
    return [from_hex(leaf) for leaf in raw]


def open_session(args: Namespace, config: RuntimeConfig) -> MerkleSession:
    """Build a session from CLI arguments, filling gaps from config."""
    defaults = config.process
    return MerkleSession.open(
        read_leaves(args),
        args.algorithm or defaults.default_algorithm,
        args.process if args.process is not None else defaults.default_process_type,
        args.initial_hash if args.initial_hash is not None else defaults.initial_hash,
    )


def print_summary_human(summary: RootSummary) -> None:
    """Print summary in human-readable format."""
    print(f"root: {summary.root}")
    print(f"algorithm: {summary.algorithm}")
    print(f"process: {summary.process_type}")
    print(f"leaves: {summary.leaf_count}")
    if summary.expected_root is not None:
        print(f"expected: {summary.expected_root}")
        print(f"match: {str(summary.match).lower()}")


def print_summary_json(summary: RootSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def print_error(error: MerkleException, output_json: bool) -> None:
    """Report a core error on stderr (or stdout as JSON)."""
    if output_json:
        print(json.dumps({"ok": False, "error": error.to_error_model().model_dump()}, indent=2))
        return
    print(f"Error: {error.message}", file=sys.stderr)
    if isinstance(error, ArgumentException) and len(error.violations) > 1:
        for violation in error.violations:
            print(f"  - {violation.message}", file=sys.stderr)


def _derive(args: Namespace) -> tuple[MerkleSession, bytes]:
    config: RuntimeConfig = getattr(args, "cli_config", None) or RuntimeConfig()
    session = open_session(args, config)
    timeout_ms = args.timeout_ms if args.timeout_ms is not None else config.process.timeout_ms
    root = session.run(timeout_ms)
    logger.debug(f"root {to_hex(root)} from {len(session.leaves)} leaves")
    return session, root


def _summarize(args: Namespace, session: MerkleSession, root: bytes) -> RootSummary:
    return RootSummary(
        root=to_hex(root),
        algorithm=session.current_algorithm,
        process_type=session.process_type.name,
        leaf_count=len(session.leaves),
        initial_hash=session.initial_hash,
    )


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        session, root = _derive(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleException as e:
        print_error(e, args.json)
        return EXIT_RUNTIME_ERROR

    summary = _summarize(args, session, root)
    if args.json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)
    return EXIT_SUCCESS


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        EXIT_SUCCESS on match, EXIT_VERIFICATION_FAILED on mismatch
    """
    try:
        expected = from_hex(args.expected)
        session, root = _derive(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleException as e:
        print_error(e, args.json)
        return EXIT_RUNTIME_ERROR

    summary = _summarize(args, session, root)
    summary.expected_root = to_hex(expected)
    summary.match = hmac.compare_digest(root, expected)

    if args.json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.match else EXIT_VERIFICATION_FAILED
