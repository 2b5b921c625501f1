"""Tests for settings module."""

import logging

import pytest

from obs_deck_button.settings import UserSettings, _parse, build_config, get_config_path, load_settings
from obs_deck_button.status import ButtonTarget, Kind

ICONS = {
    "recording-on": "/cache/recording-on.png",
    "recording-off": "/cache/recording-off.png",
    "streaming-on": "/cache/streaming-on.png",
    "streaming-off": "/cache/streaming-off.png",
    "error": "/cache/error.png",
}


class TestGetConfigPath:
    def test_default_path(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        path = get_config_path()
        assert path.name == "config.toml"
        assert "obs-deck-button" in str(path)
        assert ".config" in str(path)

    def test_xdg_override(self, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", "/custom/config")
        path = get_config_path()
        assert str(path).startswith("/custom/config")


class TestLoadSettings:
    def test_missing_file_returns_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "nope.toml")
        assert settings == UserSettings()

    def test_reads_file(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('deck_command = "/opt/streamdeckc"\n[recording]\nbutton_index = 3\n')
        settings = load_settings(path)
        assert settings.deck_command == "/opt/streamdeckc"
        assert settings.recording == {"button_index": 3}

    def test_malformed_file_returns_defaults(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text("recording = [unterminated\n")
        with caplog.at_level(logging.WARNING):
            settings = load_settings(path)
        assert settings == UserSettings()
        assert "Ignoring" in caplog.text


class TestParse:
    def test_empty_dict(self):
        assert _parse({}) == UserSettings()

    def test_kind_sections(self):
        data = {
            "recording": {"on_icon": "~/rec.png", "button_index": 2, "button_page": 1},
            "streaming": {"error_icon": "/s-err.png"},
        }
        settings = _parse(data)
        assert settings.recording == {"on_icon": "~/rec.png", "button_index": 2, "button_page": 1}
        assert settings.streaming == {"error_icon": "/s-err.png"}

    def test_invalid_index_ignored(self):
        data = {"recording": {"button_index": 0, "button_page": "two"}, "streaming": {"button_index": True}}
        settings = _parse(data)
        assert settings.recording == {}
        assert settings.streaming == {}

    def test_non_table_section_ignored(self):
        assert _parse({"recording": "yes"}).recording == {}

    def test_obs_table(self):
        settings = _parse({"obs": {"host": "studio", "port": 4460, "password": "pw"}})
        assert (settings.obs_host, settings.obs_port, settings.obs_password) == ("studio", 4460, "pw")

    def test_shared_values(self):
        settings = _parse({"error_icon": "/err.png", "deck_command": "deckctl"})
        assert settings.error_icon == "/err.png"
        assert settings.deck_command == "deckctl"


class TestBuildConfig:
    def test_defaults(self):
        config = build_config({}, UserSettings(), ICONS, env={})
        assert config.recording.target == ButtonTarget(button=9)
        assert config.streaming.target == ButtonTarget(button=10)
        assert config.recording.on_icon == "/cache/recording-on.png"
        assert config.streaming.off_icon == "/cache/streaming-off.png"
        assert config.recording.error_icon is None
        assert config.error_icon == "/cache/error.png"
        assert config.deck_command == "streamdeckc"
        assert (config.obs_host, config.obs_port, config.obs_password) == ("localhost", 4455, "")

    def test_file_over_defaults(self):
        settings = _parse({"streaming": {"button_index": 4, "button_page": 2}, "deck_command": "deckctl"})
        config = build_config({}, settings, ICONS, env={})
        assert config.streaming.target == ButtonTarget(button=4, page=2)
        assert config.deck_command == "deckctl"

    def test_cli_over_file(self):
        settings = _parse({"recording": {"button_index": 4, "off_icon": "/file.png"}})
        overrides = {"recording_button_index": 7, "recording_off_icon": "/cli.png", "streamdeckc": "/bin/sd"}
        config = build_config(overrides, settings, ICONS, env={})
        assert config.recording.target.button == 7
        assert config.recording.off_icon == "/cli.png"
        assert config.deck_command == "/bin/sd"

    def test_none_overrides_ignored(self):
        settings = _parse({"recording": {"button_index": 4}})
        config = build_config({"recording_button_index": None}, settings, ICONS, env={})
        assert config.recording.target.button == 4

    def test_env_between_file_and_cli(self):
        settings = _parse({"obs": {"host": "file-host", "port": 1, "password": "file"}})
        env = {"OBS_WS_HOST": "env-host", "OBS_WS_PORT": "4460", "OBS_WS_PASSWORD": "env"}
        config = build_config({"obs_host": "cli-host"}, settings, ICONS, env=env)
        assert config.obs_host == "cli-host"
        assert config.obs_port == 4460
        assert config.obs_password == "env"

    def test_bad_env_port_ignored(self):
        config = build_config({}, UserSettings(), ICONS, env={"OBS_WS_PORT": "abc"})
        assert config.obs_port == 4455

    def test_home_expanded_in_icons(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/tester")
        settings = _parse({"recording": {"on_icon": "~/rec.png"}})
        config = build_config({}, settings, ICONS, env={})
        assert config.recording.on_icon == "/home/tester/rec.png"

    def test_zero_button_rejected(self):
        with pytest.raises(ValueError):
            build_config({"streaming_button_index": 0}, UserSettings(), ICONS, env={})

    def test_error_icon_fallback(self):
        settings = _parse({"recording": {"error_icon": "/rec-err.png"}})
        config = build_config({"error_icon": "/shared.png"}, settings, ICONS, env={})
        assert config.error_icon_for(Kind.RECORDING) == "/rec-err.png"
        assert config.error_icon_for(Kind.STREAMING) == "/shared.png"

    def test_very_verbose_implies_verbose(self):
        config = build_config({"very_verbose": True}, UserSettings(), ICONS, env={})
        assert config.verbose and config.very_verbose

    def test_password_not_in_repr(self):
        config = build_config({}, UserSettings(), ICONS, env={"OBS_WS_PASSWORD": "hunter2"})
        assert "hunter2" not in repr(config)
