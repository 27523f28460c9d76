"""Core services for autokatalog."""

from autokatalog.core.config import ConfigManager
from autokatalog.core.service import CatalogService
from autokatalog.core.store import RecordStore

__all__ = [
    "CatalogService",
    "ConfigManager",
    "RecordStore",
]
