"""Tests for CatalogSettings model."""

import pytest
from pydantic import ValidationError

from autokatalog.models import CatalogSettings, Category
from autokatalog.models.config import DEFAULT_CAR_BRANDS, DEFAULT_MOTORCYCLE_BRANDS


class TestCatalogSettings:
    def test_defaults(self):
        s = CatalogSettings()
        assert s.page_size == 10
        assert s.data_dir is None
        assert s.admin_username == "admin"

    def test_allowed_brands_per_category(self):
        s = CatalogSettings()
        assert s.allowed_brands(Category.CAR) == DEFAULT_CAR_BRANDS
        assert s.allowed_brands(Category.MOTORCYCLE) == DEFAULT_MOTORCYCLE_BRANDS

    def test_brands_are_trimmed(self):
        s = CatalogSettings(car_brands=[" Toyota ", "", "Honda"])
        assert s.car_brands == ["Toyota", "Honda"]

    def test_page_size_bounds(self):
        with pytest.raises(ValidationError):
            CatalogSettings(page_size=0)
        with pytest.raises(ValidationError):
            CatalogSettings(page_size=101)

    def test_default_lists_not_shared(self):
        a = CatalogSettings()
        a.car_brands.append("Lexus")
        assert "Lexus" not in CatalogSettings().car_brands
