"""
Tests for streamsend.core.config.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from streamsend.core.config import DEFAULT_HOST, AppSettings, get_user_config_dir, write_user_env_vars


class TestAppSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the defaults with an empty environment."""
        for name in ("USERNAME", "PASSWORD", "HOST", "SCHEME", "PORT"):
            monkeypatch.delenv(f"STREAMSEND_{name}", raising=False)
        settings = AppSettings(_env_file=None)
        assert settings.host == DEFAULT_HOST
        assert settings.scheme == "https"
        assert settings.port is None
        assert settings.http_timeout_seconds is None
        assert settings.has_credentials is False

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that STREAMSEND_* variables are read."""
        monkeypatch.setenv("STREAMSEND_USERNAME", "scott")
        monkeypatch.setenv("STREAMSEND_PASSWORD", "topsecret")
        monkeypatch.setenv("STREAMSEND_HOST", "test.host")
        monkeypatch.setenv("STREAMSEND_HTTP_TIMEOUT_SECONDS", "5")
        settings = AppSettings(_env_file=None)
        assert settings.username == "scott"
        assert settings.host == "test.host"
        assert settings.http_timeout_seconds == 5.0
        assert settings.has_credentials is True

    def test_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that values are read from a .env file."""
        monkeypatch.delenv("STREAMSEND_USERNAME", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("STREAMSEND_USERNAME=fromfile\n", encoding="utf-8")
        assert AppSettings(_env_file=env_file).username == "fromfile"


class TestUserEnv:
    """Tests for the per-user .env helpers."""

    def test_xdg_config_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that XDG_CONFIG_HOME is honoured on Linux."""
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_user_config_dir() == tmp_path / "streamsend"

    def test_write_merges_existing(self, tmp_path: Path) -> None:
        """Test that new values are merged with existing ones."""
        env_path = tmp_path / "cfg" / ".env"
        write_user_env_vars({"STREAMSEND_USERNAME": "scott"}, env_path)
        write_user_env_vars({"STREAMSEND_PASSWORD": "topsecret", "STREAMSEND_HOST": None}, env_path)

        lines = env_path.read_text(encoding="utf-8").splitlines()
        assert "STREAMSEND_USERNAME=scott" in lines
        assert "STREAMSEND_PASSWORD=topsecret" in lines
        assert not any(line.startswith("STREAMSEND_HOST") for line in lines)
