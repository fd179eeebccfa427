"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_float, optional_env_var, require_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    InvalidConfigurationValueError,
    MissingConfigurationError,
)
from .logging import configure_logging, resolve_log_level
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .watch import WatchConfig, get_watch_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "InvalidConfigurationValueError",
    "MissingConfigurationError",
    "StorageConfig",
    "WatchConfig",
    "configure_logging",
    "env_flag",
    "env_float",
    "get_database_config",
    "get_storage_config",
    "get_watch_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
    "resolve_log_level",
]
