"""Configuration package for the academy client."""

from academy.config.app_config import (
    ApiConfig,
    AppConfig,
    AuthConfig,
    PlayerConfig,
    ProxyConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "ApiConfig",
    "AppConfig",
    "AuthConfig",
    "PlayerConfig",
    "ProxyConfig",
    "clear_config_cache",
    "load_app_config",
]
