"""Configuration file management for spent."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CONFIG: dict[str, Any] = {
    "currency": {"symbol": "$", "position": "before"},
    "import": {"skip_header": True},
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "spent" / "config.toml"


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file with owner-only permissions.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(DEFAULT_CONFIG, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration merged over the defaults.

    A missing config file yields the defaults.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}

    settings: dict[str, Any] = {}
    for section, defaults in DEFAULT_CONFIG.items():
        settings[section] = {**defaults, **config.get(section, {})}
    if "database" in config:
        settings["database"] = config["database"]
    return settings


def resolve_db_path(settings: dict[str, Any]) -> Path | None:
    """Database path from settings, or None for the default location."""
    database = settings.get("database")
    if not database:
        return None
    return Path(database).expanduser()
