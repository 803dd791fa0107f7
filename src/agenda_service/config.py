"""Configuration management using pydantic-settings.

This module provides configuration loading with the following precedence:
1. CLI arguments (highest priority)
2. Environment variables (AGENDA_* prefix)
3. Global config file (~/.config/agenda-service/config.toml)
4. Built-in defaults (lowest priority)
"""

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_config_dir() -> Path:
    """Get the global config directory (XDG compliant).

    Returns:
        Path to config directory:
        - Linux/macOS: ~/.config/agenda-service
        - Windows: %APPDATA%/agenda-service
    """
    if os.name == "nt":  # Windows
        base = Path(os.environ.get("APPDATA", Path.home()))
    else:  # Linux/macOS
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "agenda-service"


def get_config_path() -> Path:
    """Get the global config file path."""
    return get_config_dir() / "config.toml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Environment variables use AGENDA_ prefix:
    - AGENDA_BACKEND_URL
    - AGENDA_BACKEND_ANON_KEY
    - AGENDA_LOG_LEVEL
    etc.
    """

    model_config = SettingsConfigDict(
        env_prefix="AGENDA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Hosted backend (auth + tables)
    backend_url: str = Field(default="http://localhost:54321", description="Backend base URL")
    backend_anon_key: SecretStr = Field(default=SecretStr(""), description="Backend anonymous API key")
    backend_timeout_seconds: float = Field(default=30.0, gt=0, description="Backend request timeout")

    # Client-side persisted state (language preference)
    state_path: str = Field(
        default="~/.local/state/agenda-service/state.json",
        description="JSON file holding persisted client state",
    )
    default_language: Literal["es", "en"] | None = Field(
        default=None,
        description="Language used when nothing is persisted (None = detect from system)",
    )

    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )
    log_file: str | None = Field(default=None, description="Log file path (optional)")

    # HTTP server
    http_host: str = Field(default="127.0.0.1", description="HTTP server bind address")
    http_port: int = Field(default=8080, description="HTTP server port")

    # Presentation
    toast_duration_seconds: float = Field(default=3.0, gt=0, description="How long a toast stays visible")
    upcoming_events_limit: int = Field(default=6, ge=1, description="Events shown in the upcoming panel")
    live_search_min_length: int = Field(
        default=3,
        ge=1,
        description="Query length at which search runs while typing",
    )


def load_toml_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        path: Path to config file (uses default if None)

    Returns:
        Configuration dictionary (empty if file doesn't exist)
    """
    config_path = path or get_config_path()
    if config_path.exists():
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    return {}


def flatten_toml_config(toml_config: dict[str, Any]) -> dict[str, Any]:
    """Flatten nested TOML config to flat dictionary for Settings.

    Args:
        toml_config: Nested TOML configuration

    Returns:
        Flattened configuration dictionary
    """
    overrides: dict[str, Any] = {}

    if "backend" in toml_config:
        for key in ["url", "anon_key", "timeout_seconds"]:
            if key in toml_config["backend"]:
                overrides[f"backend_{key}"] = toml_config["backend"][key]

    if "server" in toml_config:
        for key in ["log_level", "log_format", "log_file"]:
            if key in toml_config["server"]:
                overrides[key] = toml_config["server"][key]
        if "host" in toml_config["server"]:
            overrides["http_host"] = toml_config["server"]["host"]
        if "port" in toml_config["server"]:
            overrides["http_port"] = toml_config["server"]["port"]

    if "client" in toml_config:
        for key in ["state_path", "default_language", "toast_duration_seconds"]:
            if key in toml_config["client"]:
                overrides[key] = toml_config["client"][key]

    if "calendar" in toml_config and "upcoming_limit" in toml_config["calendar"]:
        overrides["upcoming_events_limit"] = toml_config["calendar"]["upcoming_limit"]

    if "search" in toml_config and "live_min_length" in toml_config["search"]:
        overrides["live_search_min_length"] = toml_config["search"]["live_min_length"]

    return overrides


def load_settings_with_toml(config_path: Path | None = None) -> Settings:
    """Load settings with TOML config as base, env vars as override.

    Args:
        config_path: Optional path to TOML config file

    Returns:
        Settings instance with merged configuration
    """
    toml_config = load_toml_config(config_path)
    overrides = flatten_toml_config(toml_config)
    settings = Settings(**overrides)
    # Init kwargs beat env in pydantic-settings; re-apply env on top of the file values.
    env_settings = Settings()
    for field in env_settings.model_fields_set:
        setattr(settings, field, getattr(env_settings, field))
    return settings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance (cached)
    """
    return Settings()
