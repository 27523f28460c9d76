"""Custom exceptions for autokatalog."""

from typing import Optional


class AutokatalogError(Exception):
    """Base exception for all autokatalog errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


# ─────────────────────────────────────────────────────────────────────────────
# Config Errors
# ─────────────────────────────────────────────────────────────────────────────


class ConfigError(AutokatalogError):
    """Base class for configuration errors."""


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid configuration: {field}",
            reason,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Catalog Errors
# ─────────────────────────────────────────────────────────────────────────────


class CatalogError(AutokatalogError):
    """Base class for catalog data errors."""


class FormatError(CatalogError):
    """CSV structure is unusable (too few lines, missing headers)."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Invalid CSV format",
            reason,
        )


class RowValidationError(CatalogError):
    """One vehicle row failed validation."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = list(messages)
        super().__init__(
            "Invalid vehicle data",
            ", ".join(self.messages),
        )


class EmptyExportError(CatalogError):
    """Export was requested with no records."""

    def __init__(self) -> None:
        super().__init__(
            "No data to export",
            "Add vehicles or import a CSV file first.",
        )


class FeedError(CatalogError):
    """A listing feed file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Failed to read feed {path}",
            reason,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Store Errors
# ─────────────────────────────────────────────────────────────────────────────


class StoreError(AutokatalogError):
    """Base class for record store errors."""


class StorageError(StoreError):
    """Underlying storage failed during open or a transaction."""

    def __init__(self, operation: str, reason: Optional[str] = None) -> None:
        self.operation = operation
        super().__init__(
            f"Storage operation failed: {operation}",
            reason,
        )


class DuplicateKeyError(StoreError):
    """A record with the same id already exists."""

    def __init__(self, vehicle_id: str) -> None:
        self.vehicle_id = vehicle_id
        super().__init__(
            f"Vehicle already exists: {vehicle_id}",
            "Use 'autokatalog edit' to change an existing vehicle.",
        )


class VehicleNotFoundError(StoreError):
    """No record with the given id."""

    def __init__(self, vehicle_id: str) -> None:
        self.vehicle_id = vehicle_id
        super().__init__(
            f"Vehicle not found: {vehicle_id}",
            "Run 'autokatalog vehicles' to list stored ids.",
        )


# ─────────────────────────────────────────────────────────────────────────────
# Session Errors
# ─────────────────────────────────────────────────────────────────────────────


class NotAuthenticatedError(AutokatalogError):
    """Admin command attempted without an admin session."""

    def __init__(self) -> None:
        super().__init__(
            "Admin login required",
            "Run 'autokatalog login' first.",
        )
