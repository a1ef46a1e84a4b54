"""
CLI Configuration

Configuration loading for the Merkle CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

from pathlib import Path

from core.config.runtime import RuntimeConfig, load_runtime_config


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file (JSON or YAML)

    Returns:
        Merged configuration
    """
    return load_runtime_config(config_path)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "process": {
    "timeout_ms": 100,
    "default_algorithm": "SHA256",
    "default_process_type": "DUPE_APPEND",
    "initial_hash": false
  },
  "log_level": "INFO",
  "log_file": null
}
"""
