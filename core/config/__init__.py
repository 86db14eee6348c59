"""
Runtime Configuration Module

Provides configuration loading and logging setup for the bundle loader.
"""

from .logging_setup import setup_logging
from .runtime import LoaderConfig, get_default_config, set_default_config

__all__ = [
    "LoaderConfig",
    "get_default_config",
    "set_default_config",
    "setup_logging",
]
