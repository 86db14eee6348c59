"""
Runtime Configuration

Central configuration for transformation bundle loading.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.config.logging_setup import setup_logging
from core.schemas.versioning import MAX_SUPPORTED_MANIFEST_VERSION

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "CODETRANSFORM_"

# Fixed names inside the archive
DEFAULT_MANIFEST_FILENAME = "manifest.json"
DEFAULT_SUMMARY_FILENAME = "summary.md"
DEFAULT_SINGLE_PATCH_FILENAME = "diff.patch"
DEFAULT_DESCRIPTION_SUFFIX = ".json"

# Extraction limits
DEFAULT_MAX_ENTRIES = 10_000
DEFAULT_MAX_TOTAL_BYTES = 500 * 1024 * 1024  # 500MB


@dataclass
class LoaderConfig:
    """
    Configuration for the bundle loader.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction

    The loader never touches global logging; hosts apply `log_level` with
    `configure_logging()`.
    """
    max_supported_version: float = MAX_SUPPORTED_MANIFEST_VERSION
    extraction_root: Optional[Path] = None  # None: shared mkdtemp root
    manifest_filename: str = DEFAULT_MANIFEST_FILENAME
    summary_filename: str = DEFAULT_SUMMARY_FILENAME
    single_patch_filename: str = DEFAULT_SINGLE_PATCH_FILENAME
    description_suffix: str = DEFAULT_DESCRIPTION_SUFFIX
    max_entries: int = DEFAULT_MAX_ENTRIES
    max_total_bytes: int = DEFAULT_MAX_TOTAL_BYTES
    cleanup_on_failure: bool = True
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.extraction_root is not None:
            self.extraction_root = Path(self.extraction_root)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - CODETRANSFORM_EXTRACTION_ROOT: Directory for extracted archives
        - CODETRANSFORM_MAX_MANIFEST_VERSION: Highest fully supported manifest version
        - CODETRANSFORM_CLEANUP_ON_FAILURE: Remove extraction dir of failed loads (true/false)
        - CODETRANSFORM_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}EXTRACTION_ROOT"):
            overrides["extraction_root"] = Path(os.environ[f"{ENV_PREFIX}EXTRACTION_ROOT"])
        if os.getenv(f"{ENV_PREFIX}MAX_MANIFEST_VERSION"):
            overrides["max_supported_version"] = float(os.environ[f"{ENV_PREFIX}MAX_MANIFEST_VERSION"])
        if os.getenv(f"{ENV_PREFIX}CLEANUP_ON_FAILURE"):
            overrides["cleanup_on_failure"] = (
                os.getenv(f"{ENV_PREFIX}CLEANUP_ON_FAILURE", "true").lower() == "true"
            )
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper()

        return overrides

    @classmethod
    def from_env(cls) -> "LoaderConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LoaderConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LoaderConfig":
        """Create configuration from a dictionary, ignoring unknown keys."""
        known = {
            key: value for key, value in data.items()
            if key in cls.__dataclass_fields__
        }
        return cls(**known)

    def with_env_overrides(self) -> "LoaderConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "max_supported_version": self.max_supported_version,
            "extraction_root": str(self.extraction_root) if self.extraction_root else None,
            "manifest_filename": self.manifest_filename,
            "summary_filename": self.summary_filename,
            "single_patch_filename": self.single_patch_filename,
            "description_suffix": self.description_suffix,
            "max_entries": self.max_entries,
            "max_total_bytes": self.max_total_bytes,
            "cleanup_on_failure": self.cleanup_on_failure,
            "log_level": self.log_level,
        }

    def configure_logging(self, log_file: str | None = None) -> None:
        """Configure root logging at this config's `log_level`."""
        setup_logging(self.log_level, log_file)


# Global default configuration
_default_config: Optional[LoaderConfig] = None


def get_default_config() -> LoaderConfig:
    """Get the default loader configuration."""
    global _default_config
    if _default_config is None:
        _default_config = LoaderConfig.from_env()
    return _default_config


def set_default_config(config: Optional[LoaderConfig]) -> None:
    """Set the default loader configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
