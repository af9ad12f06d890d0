"""Configuration loading for JustDad.

Settings live in ``~/.config/justdad/config.toml``; the ``JUSTDAD_CONFIG``
environment variable points at another file. Every key is optional::

    [journal]
    db_path = "~/.config/justdad/journal.db"
    legacy_path = "~/.config/justdad/journal_entries.json"

    [stats]
    first_weekday = 0        # 0=Monday ... 6=Sunday
    timezone = "Europe/Madrid"
"""

import os
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

from justdad.errors import ConfigError

CONFIG_DIR = Path.home() / ".config" / "justdad"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
CONFIG_ENV_VAR = "JUSTDAD_CONFIG"


class Settings(BaseModel):
    """Resolved application settings."""

    db_path: Path = Field(default=CONFIG_DIR / "journal.db", description="SQLite database")
    legacy_path: Path = Field(
        default=CONFIG_DIR / "journal_entries.json",
        description="Legacy guided-journal export",
    )
    first_weekday: int = Field(default=0, ge=0, le=6, description="0=Monday ... 6=Sunday")
    timezone: Optional[str] = Field(default=None, description="IANA timezone name")

    model_config = {"frozen": True}

    @field_validator("db_path", "legacy_path", mode="after")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @property
    def zone(self) -> Optional[tzinfo]:
        return ZoneInfo(self.timezone) if self.timezone else None

    def now(self) -> datetime:
        """Current time in the configured timezone, or local time."""
        if self.timezone:
            return datetime.now(self.zone)
        return datetime.now().astimezone()


def get_config_path() -> Path:
    """Path of the config file, honoring ``JUSTDAD_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        config_path: Config file to read. Defaults to :func:`get_config_path`.

    Returns:
        Settings; defaults when the file does not exist.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values.
    """
    path = config_path or get_config_path()

    if not path.exists():
        return Settings()

    try:
        raw = toml.load(path)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e

    journal = raw.get("journal", {})
    stats = raw.get("stats", {})
    values = {
        "db_path": journal.get("db_path"),
        "legacy_path": journal.get("legacy_path"),
        "first_weekday": stats.get("first_weekday"),
        "timezone": stats.get("timezone"),
    }

    try:
        return Settings(**{key: value for key, value in values.items() if value is not None})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
