"""
Runtime Configuration Module

Provides configuration loading and management for root derivation.
"""

from .runtime import (
    DEFAULT_TIMEOUT_MS,
    ProcessConfig,
    RuntimeConfig,
    get_default_config,
    load_runtime_config,
    set_default_config,
)

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "ProcessConfig",
    "RuntimeConfig",
    "get_default_config",
    "load_runtime_config",
    "set_default_config",
]
