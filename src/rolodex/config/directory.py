"""Directory backend selection and remote directory service settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .env import ConfigurationError, env_float, env_int, optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_DIRECTORY_CHUNK_SIZE = 500
DEFAULT_DIRECTORY_TIMEOUT_SECONDS = 10.0


class DirectoryBackend(StrEnum):
    SQLALCHEMY = "sqlalchemy"
    HTTP = "http"


@dataclass(frozen=True, slots=True)
class DirectoryConfig:
    backend: DirectoryBackend = DirectoryBackend.SQLALCHEMY
    chunk_size: int = DEFAULT_DIRECTORY_CHUNK_SIZE


@dataclass(frozen=True, slots=True)
class DirectoryApiConfig:
    resilience: ResilienceConfig
    chunk_size: int = DEFAULT_DIRECTORY_CHUNK_SIZE


def get_directory_config() -> DirectoryConfig:
    raw_backend = optional_env_var("ROLODEX_DIRECTORY") or DirectoryBackend.SQLALCHEMY
    try:
        backend = DirectoryBackend(raw_backend.lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in DirectoryBackend)
        raise ConfigurationError(
            f"ROLODEX_DIRECTORY must be one of {allowed}, got {raw_backend!r}"
        ) from exc
    return DirectoryConfig(backend=backend, chunk_size=_chunk_size())


def get_directory_api_config() -> DirectoryApiConfig:
    values = require_env_vars(("ROLODEX_DIRECTORY_URL",))
    headers = {"Accept": "application/json"}
    token = optional_env_var("ROLODEX_DIRECTORY_TOKEN")
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"

    resilience = ResilienceConfig(
        name="directory",
        base_url=values["ROLODEX_DIRECTORY_URL"].rstrip("/"),
        timeout_seconds=env_float(
            "ROLODEX_DIRECTORY_TIMEOUT", DEFAULT_DIRECTORY_TIMEOUT_SECONDS
        ),
        retry=RetryPolicy(total=env_int("ROLODEX_DIRECTORY_RETRIES", RetryPolicy().total)),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers=headers,
    )
    return DirectoryApiConfig(resilience=resilience, chunk_size=_chunk_size())


def _chunk_size() -> int:
    chunk_size = env_int("ROLODEX_DIRECTORY_CHUNK_SIZE", DEFAULT_DIRECTORY_CHUNK_SIZE)
    if chunk_size <= 0:
        raise ConfigurationError("ROLODEX_DIRECTORY_CHUNK_SIZE must be positive")
    return chunk_size
