"""Configuration management for podgrid.

Handles TOML configuration loading from local and global paths,
with environment variable precedence for the API base URL.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from podgrid.core.errors import ConfigError

# Configuration file paths
LOCAL_CONFIG_PATH = Path(".podgrid/config")
GLOBAL_CONFIG_PATH = Path.home() / ".podgrid" / "config"

# Environment variable overriding api.base_url
API_URL_ENV_VAR = "PODGRID_API_URL"

DEFAULT_BASE_URL = "https://podcast-api.netlify.app"
DEFAULT_TIMEOUT = 30.0

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "api": {
        "base_url": DEFAULT_BASE_URL,
        "timeout": DEFAULT_TIMEOUT,
    },
    "display": {
        "card_genres": 2,
        "columns": 0,
    },
}


@dataclass
class ApiConfig:
    """Podcast API settings."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class DisplayConfig:
    """Rendering settings."""

    card_genres: int = 2
    columns: int = 0  # 0 lets rich fit the terminal width


@dataclass
class Config:
    """Main configuration container.

    Holds all configuration settings for podgrid, loaded from
    local and global config files with environment variable overrides.
    """

    api: ApiConfig = field(default_factory=ApiConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def get_base_url(self) -> str:
        """Get the API base URL with environment variable precedence.

        Returns:
            The URL from PODGRID_API_URL if set, otherwise the value from
            the config file, without a trailing slash.
        """
        env_url = os.environ.get(API_URL_ENV_VAR, "")
        url = env_url or self.api.base_url
        return url.rstrip("/")


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load and parse a TOML configuration file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed configuration dictionary, empty if the file does not exist.

    Raises:
        ConfigError: If the file exists but cannot be parsed.
    """
    if not path.exists():
        return {}

    try:
        content = path.read_text()
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def validate_base_url(url: Any, source: str) -> None:
    """Raise ConfigError unless ``url`` is an absolute http(s) URL."""
    if not isinstance(url, str):
        raise ConfigError(f"{source} must be a string, got {type(url).__name__}")
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise ConfigError(f"{source} is not a valid URL: '{url}'") from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"{source} must be an http(s) URL, got '{url}'")


def _validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigError: If configuration values are invalid.
    """
    api_config = config_dict.get("api", {})
    validate_base_url(api_config.get("base_url", DEFAULT_BASE_URL), "api.base_url")

    timeout = api_config.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ConfigError(f"api.timeout must be a number, got {type(timeout).__name__}")
    if timeout <= 0:
        raise ConfigError(f"api.timeout must be positive, got {timeout}")

    display_config = config_dict.get("display", {})
    for key in ["card_genres", "columns"]:
        value = display_config.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"display.{key} must be an integer, got {type(value).__name__}")
        if value < 0:
            raise ConfigError(f"display.{key} must not be negative, got {value}")


def _dict_to_config(config_dict: dict[str, Any]) -> Config:
    """Convert configuration dictionary to Config dataclass."""
    api_dict = config_dict.get("api", {})
    display_dict = config_dict.get("display", {})

    return Config(
        api=ApiConfig(
            base_url=api_dict.get("base_url", DEFAULT_BASE_URL),
            timeout=float(api_dict.get("timeout", DEFAULT_TIMEOUT)),
        ),
        display=DisplayConfig(
            card_genres=display_dict.get("card_genres", 2),
            columns=display_dict.get("columns", 0),
        ),
    )


def load_config(
    local_path: Path | None = None,
    global_path: Path | None = None,
) -> Config:
    """Load configuration from local and global config files.

    Configuration priority (highest to lowest):
    1. Local config file (.podgrid/config in current directory)
    2. Global config file ($HOME/.podgrid/config)
    3. Default values

    Environment variable PODGRID_API_URL always takes precedence
    over config file values when accessed via Config.get_base_url().

    Args:
        local_path: Override path for local config file.
        global_path: Override path for global config file.

    Returns:
        Config object with merged configuration values.

    Raises:
        ConfigError: If configuration files are invalid.
    """
    local_path = local_path or LOCAL_CONFIG_PATH
    global_path = global_path or GLOBAL_CONFIG_PATH

    merged_config = {
        "api": DEFAULT_CONFIG["api"].copy(),
        "display": DEFAULT_CONFIG["display"].copy(),
    }

    global_config = _load_toml_file(global_path)
    if global_config:
        merged_config = _deep_merge(merged_config, global_config)

    local_config = _load_toml_file(local_path)
    if local_config:
        merged_config = _deep_merge(merged_config, local_config)

    _validate_config(merged_config)

    env_url = os.environ.get(API_URL_ENV_VAR, "")
    if env_url:
        validate_base_url(env_url, API_URL_ENV_VAR)

    return _dict_to_config(merged_config)


def get_config(path: Path | None = None) -> Config:
    """Get the application configuration.

    Args:
        path: Explicit config file. When given, it replaces the local
            config file and the global file is still consulted.

    Raises:
        ConfigError: If configuration files are invalid.
    """
    if path is not None and not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    return load_config(local_path=path)
