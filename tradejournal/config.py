"""Configuration loading for the trade journal.

Settings live in ``~/.config/tradejournal/config.toml``::

    [storage]
    db_path = "~/.config/tradejournal/journal.db"

    [logging]
    level = "WARNING"

The ``TRADEJOURNAL_DB`` environment variable overrides ``storage.db_path``.
"""

import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, field_validator

CONFIG_DIR = Path.home() / ".config" / "tradejournal"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "journal.db"
DB_ENV_VAR = "TRADEJOURNAL_DB"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """The configuration file could not be read or is invalid."""


class StorageConfig(BaseModel):
    db_path: Path = Field(default=DEFAULT_DB_PATH, description="SQLite database file")

    @field_validator("db_path")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING", description="Log level")

    @field_validator("level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}")
        return level


class JournalConfig(BaseModel):
    """Validated application configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


def load_config(config_path: Optional[Path] = None) -> JournalConfig:
    """Load configuration from TOML, falling back to defaults.

    Args:
        config_path: Config file to read. Defaults to
            ``~/.config/tradejournal/config.toml``.

    Returns:
        The validated configuration. A missing file yields defaults.

    Raises:
        ConfigError: If the file cannot be parsed or fails validation.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    data: dict = {}

    if path.exists():
        try:
            data = toml.load(path)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e

    db_override = os.environ.get(DB_ENV_VAR)
    if db_override:
        storage = data.setdefault("storage", {})
        if not isinstance(storage, dict):
            raise ConfigError(f"Invalid configuration in {path}: [storage] must be a table")
        storage["db_path"] = db_override

    try:
        return JournalConfig.model_validate(data)
    except ValueError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
