"""Tests for ConfigManager."""

from pathlib import Path

import pytest

from autokatalog.core.config import DATA_DIR_ENV, ConfigManager, resolve_data_dir
from autokatalog.exceptions import ConfigValidationError
from autokatalog.models import CatalogSettings


class TestConfigManager:
    def test_missing_file_gives_defaults(self, temp_config_dir):
        manager = ConfigManager(config_dir=temp_config_dir)
        assert manager.exists is False
        assert manager.load() == CatalogSettings()

    def test_save_and_load(self, temp_config_dir):
        manager = ConfigManager(config_dir=temp_config_dir)
        manager.save(CatalogSettings(page_size=20, car_brands=["Toyota"]))
        loaded = manager.load()
        assert loaded.page_size == 20
        assert loaded.car_brands == ["Toyota"]

    def test_config_file_is_toml(self, temp_config_dir):
        manager = ConfigManager(config_dir=temp_config_dir)
        manager.save(CatalogSettings())
        assert "page_size = 10" in manager.config_path.read_text()

    def test_paths_round_trip(self, temp_config_dir, tmp_path):
        manager = ConfigManager(config_dir=temp_config_dir)
        manager.save(CatalogSettings(data_dir=tmp_path / "data"))
        assert manager.load().data_dir == tmp_path / "data"

    def test_invalid_toml(self, temp_config_dir):
        manager = ConfigManager(config_dir=temp_config_dir)
        manager.config_path.write_text("page_size = = 3")
        with pytest.raises(ConfigValidationError):
            manager.load()

    def test_invalid_value(self, temp_config_dir):
        manager = ConfigManager(config_dir=temp_config_dir)
        manager.config_path.write_text("page_size = 0\n")
        with pytest.raises(ConfigValidationError):
            manager.load()

    def test_delete(self, temp_config_dir):
        manager = ConfigManager(config_dir=temp_config_dir)
        assert manager.delete() is False
        manager.save(CatalogSettings())
        assert manager.delete() is True
        assert not manager.exists


class TestResolveDataDir:
    def test_env_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "env"))
        settings = CatalogSettings(data_dir=tmp_path / "cfg")
        assert resolve_data_dir(settings) == tmp_path / "env"

    def test_config_value(self, monkeypatch, tmp_path):
        monkeypatch.delenv(DATA_DIR_ENV, raising=False)
        assert resolve_data_dir(CatalogSettings(data_dir=tmp_path)) == tmp_path

    def test_platform_default(self, monkeypatch):
        monkeypatch.delenv(DATA_DIR_ENV, raising=False)
        assert isinstance(resolve_data_dir(CatalogSettings()), Path)
