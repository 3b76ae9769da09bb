"""
pytest suite for sync configuration loading.
"""

import json
import logging

from foldersync.services.settings import DEFAULT_EXCLUSIONS, SettingsManager, SyncConfig


class TestSyncConfig:

    def test_defaults(self):
        config = SyncConfig()
        assert config.exclusions == [".git", "node_modules", ".DS_Store"]

    def test_union_keeps_order_and_drops_duplicates(self):
        config = SyncConfig(default_exclusions=[".git", "dist"], custom_exclusions=["tmp", ".git"])
        assert config.exclusions == [".git", "dist", "tmp"]

    def test_instances_do_not_share_lists(self):
        first = SyncConfig()
        first.custom_exclusions.append("x")
        assert SyncConfig().custom_exclusions == []


class TestSettingsManager:

    def test_missing_file_falls_back(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            config = SettingsManager(tmp_path / "sync-config.json").load()
        assert config.exclusions == list(DEFAULT_EXCLUSIONS)
        assert "No config file found" in caplog.text

    def test_loads_camel_case_keys(self, tmp_path):
        path = tmp_path / "sync-config.json"
        path.write_text(json.dumps({
            "defaultExclusions": [".git"],
            "customExclusions": ["build", "*.tmp"],
        }))
        config = SettingsManager(path).config
        assert config.default_exclusions == [".git"]
        assert config.exclusions == [".git", "build", "*.tmp"]

    def test_loads_snake_case_keys(self, tmp_path):
        path = tmp_path / "sync-config.json"
        path.write_text(json.dumps({"custom_exclusions": ["vendor"]}))
        config = SettingsManager(path).load()
        assert config.default_exclusions == list(DEFAULT_EXCLUSIONS)
        assert config.custom_exclusions == ["vendor"]

    def test_invalid_json_falls_back(self, tmp_path, caplog):
        path = tmp_path / "sync-config.json"
        path.write_text("{not json")
        with caplog.at_level(logging.WARNING):
            config = SettingsManager(path).load()
        assert config == SyncConfig()
        assert "Could not read" in caplog.text

    def test_wrong_types_fall_back_per_key(self, tmp_path):
        path = tmp_path / "sync-config.json"
        path.write_text(json.dumps({"defaultExclusions": "nope", "customExclusions": ["x"]}))
        config = SettingsManager(path).load()
        assert config.default_exclusions == list(DEFAULT_EXCLUSIONS)
        assert config.custom_exclusions == ["x"]

    def test_non_object_falls_back(self, tmp_path):
        path = tmp_path / "sync-config.json"
        path.write_text(json.dumps([".git"]))
        assert SettingsManager(path).load() == SyncConfig()

    def test_save_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "sync-config.json"
        manager = SettingsManager(path)
        assert manager.save(SyncConfig(custom_exclusions=["cache"]))

        data = json.loads(path.read_text())
        assert data == {
            "defaultExclusions": list(DEFAULT_EXCLUSIONS),
            "customExclusions": ["cache"],
        }
        assert SettingsManager(path).load().custom_exclusions == ["cache"]

    def test_save_without_config(self, tmp_path):
        assert not SettingsManager(tmp_path / "c.json").save()

    def test_default_path_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        expected = (tmp_path / "sync-config.json").resolve()
        assert SettingsManager().config_path.resolve() == expected
