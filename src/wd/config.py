"""Configuration loading from environment variables and wd.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from wd.errors import ConfigError

APP_NAME = "wd"
_DB_FILENAME = "wddb"
_CONFIG_FILENAME = "wd.toml"
_DEFAULT_MIN_CONFIDENCE = 0.4


def default_db_path() -> Path:
    return Path(user_data_dir(APP_NAME, appauthor=False)) / _DB_FILENAME


def default_config_path() -> Path:
    return Path(user_config_dir(APP_NAME, appauthor=False)) / _CONFIG_FILENAME


@dataclass
class WdConfig:
    """Top-level wd configuration."""

    db_path: Path = field(default_factory=default_db_path)
    min_confidence: float = _DEFAULT_MIN_CONFIDENCE
    log_level: str = "WARNING"


def _read_toml(path: Path) -> dict:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e


def _to_float(name: str, value: object) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


def load_config(config_path: Path | None = None) -> WdConfig:
    """Load configuration from environment variables and optional wd.toml.

    Priority: environment variables > wd.toml > defaults. Command-line flags
    are applied on top by the caller. A missing `config_path` falls back to
    the default location.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = _read_toml(config_path)
    else:
        candidate = default_config_path()
        if candidate.exists():
            file_data = _read_toml(candidate)

    db = os.getenv("WD_DB", file_data.get("db"))
    if db is not None and not isinstance(db, str):
        raise ConfigError(f"db must be a path string, got {db!r}")
    confidence = os.getenv(
        "WD_MIN_CONFIDENCE", file_data.get("min_confidence", _DEFAULT_MIN_CONFIDENCE)
    )

    return WdConfig(
        db_path=Path(db).expanduser() if db else default_db_path(),
        min_confidence=_to_float("min_confidence", confidence),
        log_level=os.getenv("WD_LOG_LEVEL", file_data.get("log_level", "WARNING")),
    )
