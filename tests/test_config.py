import logging
from pathlib import Path

import pytest

from models.errors import ConfigurationError
from models.playback import Repeat, SortOrder
from services.config import AppConfig, config_from_dict, default_config_path, load_config


def write_config(tmp_path, text):
    path = tmp_path / "config.toml"
    path.write_text(text)
    return path


class TestLoadConfig:
    """Tests for reading the TOML configuration file."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.toml") == AppConfig()

    def test_full_file(self, tmp_path):
        path = write_config(tmp_path, """
[config]
path = "~/Songs"
sorting = "DurationDesc"
repeat = "AllTracks"
seek_seconds = 10
volume_step = 5
log_level = "debug"
""")
        config = load_config(path)
        assert config.music_dir == Path("~/Songs").expanduser()
        assert config.sorting is SortOrder.DURATION_DESC
        assert config.repeat is Repeat.ALL_TRACKS
        assert config.seek_seconds == 10.0
        assert config.volume_step == 5
        assert config.log_level == "DEBUG"

    def test_file_without_table_gives_defaults(self, tmp_path):
        path = write_config(tmp_path, "# nothing here\n")
        assert load_config(path) == AppConfig()

    def test_invalid_toml_raises(self, tmp_path):
        path = write_config(tmp_path, "[config\npath = ")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_config_must_be_a_table(self, tmp_path):
        path = write_config(tmp_path, 'config = "flat"\n')
        with pytest.raises(ConfigurationError):
            load_config(path)


class TestConfigFromDict:
    """Tests for per-key validation."""

    @pytest.mark.parametrize("value,expected", [
        ("TitleAsc", SortOrder.TITLE_ASC),
        ("Shuffle", SortOrder.SHUFFLE),
        ("ByDurationAscending", SortOrder.DURATION_ASC),
    ])
    def test_sorting_names_and_aliases(self, value, expected):
        assert config_from_dict({"sorting": value}).sorting is expected

    @pytest.mark.parametrize("value,expected", [
        ("ThisTrack", Repeat.THIS_TRACK),
        ("ThisMusic", Repeat.THIS_TRACK),
        ("Dont", Repeat.OFF),
    ])
    def test_repeat_names_and_aliases(self, value, expected):
        assert config_from_dict({"repeat": value}).repeat is expected

    def test_invalid_values_fall_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = config_from_dict({
                "sorting": "Sideways",
                "repeat": 3,
                "seek_seconds": 500,
                "volume_step": True,
                "log_level": "LOUD",
                "path": "",
            })
        assert config == AppConfig()
        assert "Invalid SortOrder" in caplog.text

    def test_unknown_keys_are_warned_about(self, caplog):
        with caplog.at_level(logging.WARNING):
            config_from_dict({"colour": "blue"})
        assert "Unknown config key ignored: colour" in caplog.text


class TestDefaultPath:

    def test_env_var_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TUNESHELF_CONFIG", str(tmp_path / "custom.toml"))
        assert default_config_path() == tmp_path / "custom.toml"

    def test_xdg_config_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("TUNESHELF_CONFIG", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert default_config_path() == tmp_path / "tuneshelf" / "config.toml"
