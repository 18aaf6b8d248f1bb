"""Tests for app configuration.

Tests the configuration loading, defaults, caching and env override.
"""

from academy.config.app_config import (
    AppConfig,
    clear_config_cache,
    load_app_config,
)


class TestLoadAppConfig:
    """Tests for load_app_config function."""

    def test_missing_file_uses_defaults(self, tmp_path):
        """Missing YAML falls back to built-in defaults."""
        config = load_app_config(config_path=tmp_path / "missing.yaml")

        assert isinstance(config, AppConfig)
        assert config.api.base_url == "http://localhost:8048"
        assert config.api.timeout == 30.0
        assert config.auth.login_route == "/auth/login"
        assert config.auth.logout_redirect_delay == 1.5
        assert config.player.script_url == "https://www.youtube.com/iframe_api"

    def test_partial_yaml_merges_with_defaults(self, tmp_path, monkeypatch):
        """Keys present in YAML override; others keep defaults."""
        monkeypatch.delenv("BACKEND_URL", raising=False)
        path = tmp_path / "academy.yaml"
        path.write_text(
            "api:\n  base_url: https://lms.example.com/\nauth:\n  logout_redirect_delay: 0\n"
        )

        config = load_app_config(config_path=path)

        assert config.api.base_url == "https://lms.example.com"
        assert config.api.timeout == 30.0
        assert config.auth.logout_redirect_delay == 0.0
        assert config.auth.token_file == "data/state/auth_v1.json"

    def test_backend_url_env_override(self, tmp_path, monkeypatch):
        """BACKEND_URL overrides the proxy target."""
        monkeypatch.setenv("BACKEND_URL", "http://10.0.0.5:8048/")

        config = load_app_config(config_path=tmp_path / "missing.yaml")

        assert config.proxy.backend_url == "http://10.0.0.5:8048"

    def test_config_is_cached(self, tmp_path):
        """Second call returns the cached object."""
        first = load_app_config(config_path=tmp_path / "missing.yaml")
        second = load_app_config()

        assert first is second

    def test_force_reload(self, tmp_path):
        first = load_app_config(config_path=tmp_path / "missing.yaml")
        second = load_app_config(force_reload=True, config_path=tmp_path / "missing.yaml")

        assert first is not second

    def test_clear_cache(self, tmp_path):
        first = load_app_config(config_path=tmp_path / "missing.yaml")
        clear_config_cache()
        second = load_app_config(config_path=tmp_path / "missing.yaml")

        assert first is not second
