"""Lookup defaults: region hint, phone validation level and timeout."""

from __future__ import annotations

from dataclasses import dataclass

from rolodex.domain.model import PhoneValidation

from .env import ConfigurationError, env_float, optional_env_var

DEFAULT_LOOKUP_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class LookupConfig:
    default_region: str | None = None
    phone_validation: PhoneValidation = PhoneValidation.POSSIBLE
    timeout_seconds: float | None = DEFAULT_LOOKUP_TIMEOUT_SECONDS


def get_lookup_config() -> LookupConfig:
    validation = optional_env_var("ROLODEX_PHONE_VALIDATION") or PhoneValidation.POSSIBLE
    try:
        phone_validation = PhoneValidation(validation.lower())
    except ValueError as exc:
        allowed = ", ".join(level.value for level in PhoneValidation)
        raise ConfigurationError(
            f"ROLODEX_PHONE_VALIDATION must be one of {allowed}, got {validation!r}"
        ) from exc

    timeout = env_float("ROLODEX_LOOKUP_TIMEOUT", DEFAULT_LOOKUP_TIMEOUT_SECONDS)
    if timeout < 0:
        raise ConfigurationError("ROLODEX_LOOKUP_TIMEOUT must be non-negative")

    region = optional_env_var("ROLODEX_DEFAULT_REGION")
    return LookupConfig(
        default_region=region.upper() if region else None,
        phone_validation=phone_validation,
        # 0 disables the timeout
        timeout_seconds=timeout or None,
    )
