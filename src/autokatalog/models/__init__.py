"""Data models for autokatalog."""

from autokatalog.models.catalog import (
    CatalogFilters,
    CatalogPage,
    CatalogSelection,
    CatalogVehicle,
    CatalogView,
    FilterOptions,
    Tab,
)
from autokatalog.models.config import CatalogSettings
from autokatalog.models.results import ImportResult, ParseResult
from autokatalog.models.vehicle import Category, Condition, Vehicle

__all__ = [
    # Config
    "CatalogSettings",
    # Vehicle
    "Vehicle",
    "Category",
    "Condition",
    # Browse
    "Tab",
    "CatalogVehicle",
    "CatalogFilters",
    "CatalogSelection",
    "CatalogPage",
    "FilterOptions",
    "CatalogView",
    # Results
    "ParseResult",
    "ImportResult",
]
