"""Application configuration helpers."""

from __future__ import annotations

from .directory import (
    DirectoryApiConfig,
    DirectoryBackend,
    DirectoryConfig,
    get_directory_api_config,
    get_directory_config,
)
from .env import ConfigurationError, MissingConfigurationError, optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .lookup import LookupConfig, get_lookup_config
from .storage import DatabaseConfig, default_data_dir, get_database_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "DirectoryApiConfig",
    "DirectoryBackend",
    "DirectoryConfig",
    "LookupConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "default_data_dir",
    "get_database_config",
    "get_directory_api_config",
    "get_directory_config",
    "get_lookup_config",
    "optional_env_var",
    "require_env_vars",
]
