"""Tests for the config module."""
import json
import pytest
from markprompter.config import AppConfig, load_config_file, apply_overrides
from markprompter.errors import ConfigError
from markprompter.models import PlayerStatus


class TestAppConfig:
    """Tests for AppConfig dataclass."""

    def test_default_values(self):
        """Test default startup settings."""
        cfg = AppConfig()
        assert cfg.speed == 50.0
        assert cfg.font_size == 18.0
        assert cfg.pause_at_headings is False
        assert cfg.pause_duration == 2.0
        assert cfg.auto_restart is False
        assert cfg.themes_path == "themes.json"
        assert cfg.reload_interval == 1.0
        assert cfg.frame_interval_ms == 16

    def test_to_playback_state(self):
        """Test conversion to an initial playback state."""
        cfg = AppConfig(speed=120, font_size=30, pause_at_headings=True, auto_restart=True)
        st = cfg.to_playback_state()
        assert st.speed == 120.0
        assert st.font_size == 30.0
        assert st.pause_at_headings is True
        assert st.auto_restart is True
        assert st.position == 0.0
        assert st.status is PlayerStatus.STOPPED


class TestLoadConfigFile:
    """Tests for load_config_file function."""

    def test_load_config_none_path(self):
        """Test loading config with None path returns empty dict."""
        assert load_config_file(None) == {}

    def test_load_config_file_not_found(self):
        """Test loading non-existent config file raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config_file("/nonexistent/path/config.json")

    def test_load_valid_config_file(self, tmp_path):
        """Test loading a valid config file."""
        config_data = {"speed": 80, "auto_restart": True}
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps(config_data), encoding="utf-8")

        assert load_config_file(str(config_file)) == config_data

    def test_load_config_invalid_json(self, tmp_path):
        """Test loading invalid JSON raises ConfigError."""
        config_file = tmp_path / "invalid.json"
        config_file.write_text("not valid json", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config_file(str(config_file))

    def test_load_config_non_dict(self, tmp_path):
        """Test loading JSON that isn't a dict raises ConfigError."""
        config_file = tmp_path / "array.json"
        config_file.write_text(json.dumps([1, 2]), encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config_file(str(config_file))

    def test_config_error_is_value_error(self, tmp_path):
        """Test ConfigError can be handled as ValueError."""
        with pytest.raises(ValueError):
            load_config_file(str(tmp_path / "nope.json"))


class TestApplyOverrides:
    """Tests for apply_overrides function."""

    def test_apply_single_override(self):
        """Test applying a single override."""
        cfg = apply_overrides(AppConfig(), {"speed": 200})
        assert cfg.speed == 200
        assert cfg.font_size == 18.0

    def test_unknown_keys_ignored(self):
        """Test unknown keys don't break the config."""
        cfg = apply_overrides(AppConfig(), {"volume": 11, "speed": 70})
        assert cfg.speed == 70
        assert not hasattr(cfg, "volume")

    def test_none_values_ignored(self):
        """Test None means 'not given'."""
        cfg = apply_overrides(AppConfig(speed=90), {"speed": None})
        assert cfg.speed == 90

    def test_int_promoted_to_float(self):
        """Test whole numbers are accepted for float fields."""
        cfg = apply_overrides(AppConfig(), {"speed": 80, "frame_interval_ms": 20.0})
        assert isinstance(cfg.speed, float)
        assert cfg.frame_interval_ms == 20

    @pytest.mark.parametrize("overrides", [
        {"speed": "fast"},
        {"speed": float("nan")},
        {"font_size": float("inf")},
        {"speed": True},
        {"pause_at_headings": "false"},
        {"auto_restart": 0},
        {"themes_path": 3},
        {"frame_interval_ms": 16.5},
    ])
    def test_wrong_types_rejected(self, overrides):
        """Test values of the wrong type raise ConfigError."""
        with pytest.raises(ConfigError):
            apply_overrides(AppConfig(), overrides)

    def test_base_not_modified(self):
        """Test the base config is left untouched."""
        base = AppConfig()
        apply_overrides(base, {"speed": 300})
        assert base.speed == 50.0
