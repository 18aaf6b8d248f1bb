"""Application configuration loader.

Loads centralized configuration from data/config/academy_v1.yaml,
falling back to built-in defaults when the file is missing.

Usage:
    from academy.config.app_config import load_app_config

    config = load_app_config()
    print(config.api.base_url)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/academy_v1.yaml")

BACKEND_URL_ENV = "BACKEND_URL"


@dataclass
class ApiConfig:
    """Connection settings for the backend REST API."""

    base_url: str = "http://localhost:8048"
    timeout: float = 30.0


@dataclass
class AuthConfig:
    """Credential storage and logout behaviour."""

    token_file: str = "data/state/auth_v1.json"
    login_route: str = "/auth/login"
    logout_redirect_delay: float = 1.5


@dataclass
class ProxyConfig:
    """Same-origin proxy settings."""

    backend_url: str = "http://localhost:8048"


@dataclass
class PlayerConfig:
    """Embeddable player script settings."""

    script_url: str = "https://www.youtube.com/iframe_api"
    origin: str = "http://localhost:4200"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    api: ApiConfig = field(default_factory=ApiConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    proxy: ProxyConfig = field(default_factory=ProxyConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "api": {
            "base_url": "http://localhost:8048",
            "timeout": 30.0,
        },
        "auth": {
            "token_file": "data/state/auth_v1.json",
            "login_route": "/auth/login",
            "logout_redirect_delay": 1.5,
        },
        "proxy": {
            "backend_url": "http://localhost:8048",
        },
        "player": {
            "script_url": "https://www.youtube.com/iframe_api",
            "origin": "http://localhost:4200",
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object.

    Sections or keys missing from ``data`` keep their defaults.
    """
    defaults = _get_defaults()

    def section(name: str) -> dict[str, Any]:
        merged = dict(defaults[name])
        merged.update(data.get(name) or {})
        return merged

    api = section("api")
    auth = section("auth")
    proxy = section("proxy")
    player = section("player")

    backend_url = os.environ.get(BACKEND_URL_ENV) or proxy["backend_url"]

    return AppConfig(
        api=ApiConfig(
            base_url=str(api["base_url"]).rstrip("/"),
            timeout=float(api["timeout"]),
        ),
        auth=AuthConfig(
            token_file=str(auth["token_file"]),
            login_route=str(auth["login_route"]),
            logout_redirect_delay=float(auth["logout_redirect_delay"]),
        ),
        proxy=ProxyConfig(backend_url=str(backend_url).rstrip("/")),
        player=PlayerConfig(
            script_url=str(player["script_url"]),
            origin=str(player["origin"]),
        ),
    )


def load_app_config(
    force_reload: bool = False,
    config_path: Path | None = None,
) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.
        config_path: Alternative YAML file (defaults to CONFIG_FILE).

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    path = config_path or CONFIG_FILE
    data: dict[str, Any]

    if path.exists():
        logger.debug("loading_app_config", source=str(path))
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config", missing=str(path))
        data = {}

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
