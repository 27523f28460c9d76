"""Shared test fixtures for autokatalog."""

from datetime import datetime, timezone

import pytest
from unittest.mock import patch

from autokatalog.models import Vehicle

# Fixed timestamp so comparisons never depend on wall-clock time
FIXED_TIME = datetime(2024, 1, 15, 8, 30, tzinfo=timezone.utc)

SAMPLE_CSV = "\n".join([
    "merk,model,tipe,warna,tahun,cc,transmisi,lokasi,harga,kategori,kondisi",
    '"Toyota","Avanza 1.5 G","MPV","Hitam","2024","1500","CVT","Jakarta","255000000","Car","New"',
    '"Honda","PCX 160","Matic","Putih","2024","160","Automatic","Surabaya","35000000","Motorcycle","New"',
    '"Suzuki","Ertiga GX","MPV","Silver","2021","1500","Manual","Bandung","180000000","Car","Used"',
])


@pytest.fixture
def temp_config_dir(tmp_path):
    """Provide isolated config directory for tests."""
    config_dir = tmp_path / ".config" / "autokatalog"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture
def temp_data_dir(tmp_path):
    """Provide isolated data directory for the record store."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def make_vehicle():
    """Factory for valid Vehicle records with fixed timestamps."""

    def _make(vehicle_id: str = "vehicle_1", **overrides) -> Vehicle:
        fields = {
            "id": vehicle_id,
            "brand": "Toyota",
            "model": "Avanza",
            "type": "MPV",
            "color": "Hitam",
            "year": "2024",
            "engine_capacity": "1500",
            "transmission": "CVT",
            "location": "Jakarta",
            "price": "255000000",
            "category": "Car",
            "condition": "New",
            "created_at": FIXED_TIME,
            "updated_at": FIXED_TIME,
        }
        fields.update(overrides)
        return Vehicle(**fields)

    return _make


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV


@pytest.fixture
def cli_env(tmp_path, temp_config_dir, monkeypatch):
    """Point CLI commands at an empty config dir and a temp record store."""
    from autokatalog.core.config import DATA_DIR_ENV, ConfigManager

    data_dir = tmp_path / "cli-data"
    monkeypatch.setenv(DATA_DIR_ENV, str(data_dir))
    manager = ConfigManager(config_dir=temp_config_dir)
    with patch("autokatalog.cli.runtime.ConfigManager", return_value=manager):
        yield data_dir
