"""Tests for configuration loading and duration parsing."""
from datetime import timedelta

import pytest
import yaml
from pydantic import ValidationError

from gator.config import Config, ConfigModel, PollerConfig, load_config, parse_duration, save_config


class TestParseDuration:
    """Tests for parse_duration."""

    @pytest.mark.parametrize("text, expected", [
        ("30s", timedelta(seconds=30)),
        ("1m", timedelta(minutes=1)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1.5h", timedelta(hours=1, minutes=30)),
        ("500ms", timedelta(milliseconds=500)),
        (" 2m ", timedelta(minutes=2)),
    ])
    def test_valid(self, text, expected):
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["", "10", "ten seconds", "5d", "1m 30s", "0s", "-1m"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_duration(text)


class TestConfig:
    """Tests for Config and the YAML loader."""

    def test_defaults(self):
        config = ConfigModel()

        assert config.current_user_name is None
        assert config.poller.interval == "1m"
        assert config.poller.user_agent == "gator"
        assert config.logging.level == "INFO"

    def test_invalid_interval_rejected(self):
        with pytest.raises(ValidationError):
            PollerConfig(interval="soon")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("postgres: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("poller:\n  fetch_timeout: -1\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_config(path)

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config(path) == ConfigModel()

    def test_set_user_persists(self, tmp_path):
        path = tmp_path / "config.yaml"
        save_config(ConfigModel(), path)

        Config(path).set_user("alice")

        assert yaml.safe_load(path.read_text())["current_user_name"] == "alice"
        assert Config(path).current_user_name == "alice"

    def test_poll_interval(self, tmp_path):
        path = tmp_path / "config.yaml"
        save_config(ConfigModel(poller={"interval": "45s"}), path)

        assert Config(path).poll_interval == timedelta(seconds=45)

    def test_password_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        save_config(ConfigModel(postgres={"password_env": "TEST_GATOR_PW"}), path)
        monkeypatch.setenv("TEST_GATOR_PW", "s3cret")

        assert Config(path).get_db_config()["password"] == "s3cret"

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "elsewhere.yaml"
        monkeypatch.setenv("GATOR_CONFIG", str(path))

        assert Config().config_path == path
