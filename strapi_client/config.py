"""Configuration management for strapi-client."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import tomli_w

from strapi_client.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)

DEFAULT_BASE_URL = "http://localhost:1337"
DEFAULT_API_PATH = "/api"
DEFAULT_TIMEOUT = 30.0


def get_config_dir() -> Path:
    """Get the default configuration directory."""
    return Path.home() / ".config" / "strapi-client"


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return get_config_dir() / "config.toml"


@dataclass
class Config:
    """Client configuration.

    Attributes:
        base_url: Scheme and host of the Strapi server, e.g. https://cms.example.com.
        api_path: Path prefix prepended to every endpoint path.
        token: API token sent as a bearer token. None disables the header
            unless another auth provider supplies one.
        timeout: Request timeout in seconds, passed to the transport.
        verify_ssl: Whether TLS certificates are verified.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    base_url: str = DEFAULT_BASE_URL
    api_path: str = DEFAULT_API_PATH
    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.
        """
        warnings: list[str] = []

        self.base_url = self.base_url.rstrip("/")

        scheme = urlsplit(self.base_url).scheme
        if scheme not in ("http", "https"):
            warnings.append(f"server.base_url={self.base_url!r} is not an http(s) URL")

        if self.api_path and not self.api_path.startswith("/"):
            warnings.append(f"server.api_path={self.api_path!r} should start with '/'")

        if self.timeout <= 0:
            warnings.append(f"server.timeout={self.timeout} must be positive")

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: strapi-client init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [server] section
    server = data.get("server", {})
    if "base_url" in server:
        value = server["base_url"]
        if not isinstance(value, str):
            raise ConfigValidationError("server.base_url", value, "must be a string URL")
        config.base_url = value

    if "api_path" in server:
        value = server["api_path"]
        if not isinstance(value, str):
            raise ConfigValidationError("server.api_path", value, "must be a string")
        config.api_path = value

    if "timeout" in server:
        value = server["timeout"]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigValidationError("server.timeout", value, "must be a number of seconds")
        config.timeout = float(value)

    if "verify_ssl" in server:
        value = server["verify_ssl"]
        if not isinstance(value, bool):
            raise ConfigValidationError("server.verify_ssl", value, "must be a boolean")
        config.verify_ssl = value

    # Parse [auth] section
    auth = data.get("auth", {})
    if "token" in auth:
        value = auth["token"]
        if value is not None and not isinstance(value, str):
            raise ConfigValidationError("auth.token", value, "must be a string or null")
        config.token = value or None

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "server": {
            "base_url": config.base_url,
            "api_path": config.api_path,
            "timeout": config.timeout,
            "verify_ssl": config.verify_ssl,
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    if config.token is not None:
        data["auth"] = {"token": config.token}

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
