"""
Runtime Configuration

Central configuration for root derivation defaults, deadlines and logging.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


# Environment variable prefix
ENV_PREFIX = "MERKLE_"

DEFAULT_TIMEOUT_MS = 100.0


@dataclass
class ProcessConfig:
    """Defaults applied to root derivation requests."""
    timeout_ms: float = DEFAULT_TIMEOUT_MS
    default_algorithm: str = "SHA256"
    default_process_type: str = "DUPE_APPEND"
    initial_hash: bool = False

    def __post_init__(self):
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    process: ProcessConfig = field(default_factory=ProcessConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - MERKLE_PROCESS_TIMEOUT_MS: Reduction deadline in milliseconds
        - MERKLE_DEFAULT_ALGORITHM: Hash algorithm used when none is given
        - MERKLE_DEFAULT_PROCESS_TYPE: Process type used when none is given
        - MERKLE_INITIAL_HASH: Hash leaves once before reduction (true/false)
        - MERKLE_LOG_LEVEL: Log level
        - MERKLE_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}PROCESS_TIMEOUT_MS"):
            overrides.setdefault("process", {})["timeout_ms"] = float(
                os.getenv(f"{ENV_PREFIX}PROCESS_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))
            )
        if os.getenv(f"{ENV_PREFIX}DEFAULT_ALGORITHM"):
            overrides.setdefault("process", {})["default_algorithm"] = os.getenv(
                f"{ENV_PREFIX}DEFAULT_ALGORITHM"
            )
        if os.getenv(f"{ENV_PREFIX}DEFAULT_PROCESS_TYPE"):
            overrides.setdefault("process", {})["default_process_type"] = os.getenv(
                f"{ENV_PREFIX}DEFAULT_PROCESS_TYPE"
            )
        if os.getenv(f"{ENV_PREFIX}INITIAL_HASH"):
            overrides.setdefault("process", {})["initial_hash"] = (
                os.getenv(f"{ENV_PREFIX}INITIAL_HASH", "false").lower() == "true"
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON or YAML file, chosen by extension."""
        path = Path(path)
        if path.suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        process_data = data.get("process", {})
        process = ProcessConfig(**process_data) if process_data else ProcessConfig()

        return cls(
            process=process,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "process" in overrides:
            for key, value in overrides["process"].items():
                setattr(new_config.process, key, value)
            new_config.process.__post_init__()

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "process": {
                "timeout_ms": self.process.timeout_ms,
                "default_algorithm": self.process.default_algorithm,
                "default_process_type": self.process.default_process_type,
                "initial_hash": self.process.initial_hash,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


def config_search_paths() -> list[Path]:
    """Config file locations, in lookup order."""
    return [
        Path.cwd() / "merkle.json",
        Path.cwd() / ".merkle.json",
        Path.home() / ".config" / "merkle" / "config.json",
    ]


def load_runtime_config(path: str | Path | None = None) -> RuntimeConfig:
    """
    Load RuntimeConfig from a config file, then overlay environment variables.

    An explicit `path` must exist. Without one, the first readable file
    from config_search_paths() is used, falling back to defaults.
    Environment variables ALWAYS override config file values.
    """
    if path is not None:
        return RuntimeConfig.from_file(path).with_env_overrides()

    config: RuntimeConfig | None = None

    for candidate in config_search_paths():
        if candidate.exists():
            try:
                config = RuntimeConfig.from_file(candidate)
                logger.info(f"Loaded config from {candidate}")
                break
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {candidate}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
