"""
Pytest configuration and shared fixtures for Merkle root tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used leaf sets and known root vectors
3. Pins a generous reduction deadline so slow CI runners do not time out
"""

import os
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")
_runtime = importlib.import_module("core.config.runtime")

make_proof_leaves = _common.make_proof_leaves
PROOF_ROOTS = _common.PROOF_ROOTS


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def generous_deadline():
    """Run every test with a 10 s reduction deadline, then restore defaults."""
    _runtime.set_default_config(
        _runtime.RuntimeConfig(process=_runtime.ProcessConfig(timeout_ms=10_000))
    )
    yield
    _runtime.set_default_config(None)


@pytest.fixture
def proof_leaves():
    """Leaves for the 'I want proof right now' vectors."""
    return make_proof_leaves()


@pytest.fixture
def proof_roots():
    """Expected roots for the proof leaves, keyed by ProcessType."""
    return {pt: bytes.fromhex(h) for pt, h in PROOF_ROOTS.items()}


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove MERKLE_* variables and run from an empty directory."""
    for key in list(os.environ):
        if key.startswith("MERKLE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
