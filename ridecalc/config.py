"""Display and storage settings kept in a TOML file under XDG_CONFIG_HOME.

Ledger settings (savings percentage, odometer, alert distance, theme) live in
the ledger itself; this file only holds how things are shown and where the
database is.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: dict[str, Any] = {
    "currency_symbol": "R$",
    "thousands_separator": ".",
    "decimal_separator": ",",
    "log_level": "WARNING",
}


def get_xdg_config_home() -> Path:
    """XDG_CONFIG_HOME, or ~/.config when unset."""
    configured = os.environ.get("XDG_CONFIG_HOME")
    return Path(configured) if configured else Path.home() / ".config"


def get_config_path() -> Path:
    return get_xdg_config_home() / "ridecalc" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Write the default settings (mode 600)."""
    save_settings(dict(DEFAULT_SETTINGS), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Read the raw TOML settings.

    Args:
        config_path: File to read; the XDG location when None.

    Raises:
        FileNotFoundError: When the file hasn't been created yet.
    """
    path = config_path or get_config_path()
    with open(path, "rb") as fh:
        return tomllib.load(fh)


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Settings from the file laid over DEFAULT_SETTINGS.

    A missing file just gives the defaults, and so does one that isn't valid
    TOML (with a warning).
    """
    settings = dict(DEFAULT_SETTINGS)
    try:
        settings.update(load_config(config_path))
    except FileNotFoundError:
        pass
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring unreadable config file %s: %s", config_path or get_config_path(), e)
    return settings


def save_settings(settings: dict[str, Any], config_path: Path | None = None) -> None:
    """Write settings as TOML, readable only by the owner.

    Args:
        settings: Values to write.
        config_path: Destination; the XDG location when None.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "wb") as fh:
        tomli_w.dump(settings, fh)

    os.chmod(path, 0o600)
