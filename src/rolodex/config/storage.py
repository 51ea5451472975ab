"""Location of the account database."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "rolodex"
DEFAULT_DB_FILENAME: Final[str] = "rolodex.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    # None when DATABASE_URI points somewhere else
    data_dir: Path | None = None


def default_data_dir() -> Path:
    """``ROLODEX_DATA_DIR``, else ``$XDG_DATA_HOME/rolodex``, else ``~/.local/share/rolodex``."""

    explicit = optional_env_var("ROLODEX_DATA_DIR")
    if explicit is not None:
        return Path(explicit).expanduser().resolve()
    xdg = optional_env_var("XDG_DATA_HOME")
    base = Path(xdg) if xdg is not None else Path.home() / ".local" / "share"
    return (base / APP_DIR_NAME).expanduser().resolve()


def get_database_config() -> DatabaseConfig:
    uri = optional_env_var("DATABASE_URI")
    if uri is not None:
        return DatabaseConfig(uri=uri)
    data_dir = default_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return DatabaseConfig(
        uri=f"sqlite+pysqlite:///{data_dir / DEFAULT_DB_FILENAME}",
        data_dir=data_dir,
    )
