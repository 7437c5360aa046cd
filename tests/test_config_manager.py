"""Tests for config_manager module."""

import json
import os

import pytest

from bigpagepdf.utils.config_manager import DEFAULT_CONFIG, ConfigManager
from bigpagepdf.utils.exceptions import ConfigurationError


class TestConfigManager:
    def _make_manager(self, tmp_dir, initial=None):
        path = os.path.join(tmp_dir, "config.json")
        if initial is not None:
            with open(path, "w") as f:
                json.dump(initial, f)
        return ConfigManager(config_path=path)

    def test_get_default_value(self, tmp_path):
        cm = self._make_manager(tmp_path)
        assert cm.get("nonexistent.key", "fallback") == "fallback"

    def test_defaults(self, tmp_path):
        cm = self._make_manager(tmp_path)
        assert cm.get("editor.rotation_step") == 90
        assert cm.get("save.allow_empty_output") is False
        assert cm.get("save.output_suffix") == "edited"
        assert cm.get("save.overwrite_existing") is False

    def test_creates_file_on_first_use(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        ConfigManager(config_path=str(path))
        assert json.loads(path.read_text()) == DEFAULT_CONFIG

    def test_set_and_get(self, tmp_path):
        cm = self._make_manager(tmp_path)
        cm.set("save.output_suffix", "reordered", save_immediately=False)
        assert cm.get("save.output_suffix") == "reordered"

    def test_save_and_reload(self, tmp_path):
        path = os.path.join(tmp_path, "config.json")
        cm = ConfigManager(config_path=path)
        cm.set("test.key", "value123")
        cm2 = ConfigManager(config_path=path)
        assert cm2.get("test.key") == "value123"

    def test_nested_key_path(self, tmp_path):
        cm = self._make_manager(tmp_path)
        cm.set("a.b.c", 42, save_immediately=False)
        assert cm.get("a.b.c") == 42

    def test_set_through_value_raises(self, tmp_path):
        cm = self._make_manager(tmp_path)
        with pytest.raises(ConfigurationError):
            cm.set("save.output_suffix.deeper", 1, save_immediately=False)

    def test_save_returns_true(self, tmp_path):
        cm = self._make_manager(tmp_path)
        assert cm.save() is True

    def test_upgrade_fills_missing_keys(self, tmp_path):
        cm = self._make_manager(tmp_path, initial={"save": {"output_suffix": "mine"}})
        assert cm.get("save.output_suffix") == "mine"
        assert cm.get("save.allow_empty_output") is False
        assert cm.get("editor.rotation_step") == 90
        assert cm.get("version") == DEFAULT_CONFIG["version"]

    def test_invalid_json_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        cm = ConfigManager(config_path=str(path))
        assert cm.get("save.output_suffix") == "edited"

    def test_non_object_falls_back_to_defaults(self, tmp_path):
        cm = self._make_manager(tmp_path, initial=[1, 2, 3])
        assert cm.get("editor.rotation_step") == 90


class TestRotationStep:
    def _manager(self, tmp_path, step):
        cm = ConfigManager(config_path=str(tmp_path / "config.json"))
        cm.set("editor.rotation_step", step, save_immediately=False)
        return cm

    def test_default_step(self, tmp_path):
        assert ConfigManager(config_path=str(tmp_path / "c.json")).get_rotation_step() == 90

    def test_half_turn_step(self, tmp_path):
        assert self._manager(tmp_path, 180).get_rotation_step() == 180

    @pytest.mark.parametrize("step", [45, 0, 360, "90"])
    def test_invalid_step_raises(self, tmp_path, step):
        with pytest.raises(ConfigurationError, match="editor.rotation_step"):
            self._manager(tmp_path, step).get_rotation_step()
