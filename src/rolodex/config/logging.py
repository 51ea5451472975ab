"""Root logger setup for the command line."""

from __future__ import annotations

import logging

from .env import ConfigurationError, optional_env_var

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# per-request lines from the HTTP stack are kept at WARNING and above
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Configure the root logger once.

    ``level`` falls back to ``ROLODEX_LOG_LEVEL`` and then to INFO.
    """

    resolved = level if level is not None else optional_env_var("ROLODEX_LOG_LEVEL") or "INFO"
    if isinstance(resolved, str):
        name = resolved.upper()
        if name not in logging.getLevelNamesMapping():
            raise ConfigurationError(f"ROLODEX_LOG_LEVEL must be a logging level, got {resolved!r}")
        resolved = logging.getLevelNamesMapping()[name]

    logging.basicConfig(level=resolved, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    for logger_name in _CHATTY_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(resolved, logging.WARNING))
