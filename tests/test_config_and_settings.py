"""
Configuration and Settings Persistence Tests
"""

import pytest
import yaml

from models.player_config import PlayerConfig, serialize_value
from services.config_service import ConfigService
from services.settings_store import MemorySettingsStore, YamlSettingsStore


class TestSerializeValue:

    @pytest.mark.parametrize("raw, expected", [
        ("true", True),
        ("FALSE", False),
        ("320", 320),
        ("-4", -4),
        ("0.5", 0.5),
        ("uniform", "uniform"),
        ("", ""),
        (42, 42),
        (None, None),
    ])
    def test_serialize(self, raw, expected):
        assert serialize_value(raw) == expected


class TestPlayerConfig:
    """Player configuration model"""

    def test_defaults(self):
        config = PlayerConfig()

        assert config.volume == 90
        assert config.mute is False
        assert config.width == 480
        assert config.height == 320
        assert config.stretching == "uniform"
        assert config.primary == "html5"
        assert config.components == {"controlbar": {}, "display": {}}

    def test_from_dict_serializes_and_ignores_unknown(self):
        config = PlayerConfig.from_dict({
            "autostart": "true",
            "width": "640",
            "skin": "seven",
        })

        assert config.autostart is True
        assert config.width == 640
        assert not hasattr(config, "skin")

    def test_with_overrides_returns_copy(self):
        base = PlayerConfig()
        changed = base.with_overrides({"volume": 10})

        assert base.volume == 90
        assert changed.volume == 10
        assert base.with_overrides(None) is base

    def test_to_dict_round_trip(self):
        config = PlayerConfig(id="main", repeat=True)
        assert PlayerConfig.from_dict(config.to_dict()) == config


class TestConfigService:
    """Configuration Service Tests"""

    def test_defaults_without_file(self, tmp_path):
        config = ConfigService(str(tmp_path / "config.yaml"))

        assert config.get("player.volume") == 90
        assert config.get("missing.key", "fallback") == "fallback"

    def test_file_is_merged_over_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"player": {"width": 800, "autostart": "true"}}), encoding="utf-8")

        config = ConfigService(str(path))
        player_config = config.build_player_config()

        assert player_config.width == 800
        assert player_config.autostart is True
        assert player_config.height == 320

    def test_precedence(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"player": {"volume": 50, "mute": False}}), encoding="utf-8")
        config = ConfigService(str(path))

        assert config.build_player_config().volume == 50
        assert config.build_player_config({"volume": 30}).volume == 30
        assert config.build_player_config({"volume": 30}, {"volume": 75}).volume == 75
        assert config.build_player_config({"mute": True}).mute is True

    def test_invalid_yaml_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("player: [unclosed", encoding="utf-8")

        config = ConfigService(str(path))

        assert config.get("player.width") == 480

    def test_set_and_get(self, tmp_path):
        config = ConfigService(str(tmp_path / "config.yaml"))
        config.set("test.value", 123)

        assert config.get("test.value") == 123

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"
        config = ConfigService(str(path))
        config.set("player.repeat", True)

        assert config.save() is True
        assert path.exists()

        config.set("player.repeat", False)
        assert config.reload() is True
        assert config.get("player.repeat") is True

    def test_reset(self, tmp_path):
        config = ConfigService(str(tmp_path / "config.yaml"))
        config.set("player.width", 1)
        config.reset()

        assert config.get("player.width") == 480

    def test_settings_path(self, tmp_path):
        config = ConfigService(str(tmp_path / "config.yaml"))
        assert config.settings_path == tmp_path / "settings.yaml"

        config.set("settings.path", str(tmp_path / "elsewhere.yaml"))
        assert config.settings_path == tmp_path / "elsewhere.yaml"


class TestSettingsStores:
    """Settings persistence"""

    def test_memory_store(self):
        store = MemorySettingsStore()
        assert store.load() == {}

        store.save("volume", 40)
        store.save("mute", True)
        assert store.load() == {"volume": 40, "mute": True}

    def test_yaml_store_missing_file(self, tmp_path):
        store = YamlSettingsStore(tmp_path / "settings.yaml")
        assert store.load() == {}

    def test_yaml_store_save_and_load(self, tmp_path):
        path = tmp_path / "sub" / "settings.yaml"
        store = YamlSettingsStore(path)

        store.save("volume", 65)
        store.save("mute", False)

        assert path.exists()
        assert YamlSettingsStore(path).load() == {"volume": 65, "mute": False}

    def test_yaml_store_ignores_unknown_keys(self, tmp_path):
        store = YamlSettingsStore(tmp_path / "settings.yaml")
        store.save("skin", "dark")
        assert store.load() == {}

    def test_invalid_values_are_dropped(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"volume": "loud", "mute": "yes"}), encoding="utf-8")

        assert YamlSettingsStore(path).load() == {}

    def test_corrupted_file_loads_empty(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("volume: [", encoding="utf-8")

        assert YamlSettingsStore(path).load() == {}
