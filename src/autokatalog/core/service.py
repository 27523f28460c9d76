"""Catalog service: the composition root for admin and browse use cases."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from autokatalog.catalog import csv_codec
from autokatalog.catalog.normalize import load_feed_dir, normalize_all
from autokatalog.catalog.query import filter_options, query
from autokatalog.core.config import resolve_data_dir
from autokatalog.core.store import RecordStore, store_path
from autokatalog.exceptions import (
    NotAuthenticatedError,
    RowValidationError,
    StoreError,
    VehicleNotFoundError,
)
from autokatalog.models import (
    CatalogSelection,
    CatalogSettings,
    CatalogView,
    ImportResult,
    Tab,
    Vehicle,
)
from autokatalog.models.vehicle import utcnow

logger = logging.getLogger(__name__)

# Fields an edit may change; id and timestamps are managed here
EDITABLE_FIELDS = tuple(f for f in csv_codec.FIELD_COLUMNS if f != "id")


class CatalogService:
    """Owns the record store handle and exposes the catalog operations.

    Usage:
        async with CatalogService.from_settings(settings) as service:
            result = await service.import_csv(text)
    """

    def __init__(
        self,
        store: RecordStore,
        settings: Optional[CatalogSettings] = None,
    ) -> None:
        self.store = store
        self.settings = settings or CatalogSettings()

    @classmethod
    def from_settings(cls, settings: CatalogSettings) -> "CatalogService":
        """Build a service on the store in the configured data directory."""
        path = store_path(resolve_data_dir(settings))
        return cls(RecordStore(path), settings)

    async def __aenter__(self) -> "CatalogService":
        await self.store.open()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.store.close()

    # ─────────────────────────────────────────────────────────────────────
    # Admin session
    # ─────────────────────────────────────────────────────────────────────

    async def login(self, username: str, password: str) -> bool:
        """Set the admin flag if the credentials match config.toml."""
        if (
            username != self.settings.admin_username
            or password != self.settings.admin_password
        ):
            logger.info("Admin login rejected for %r", username)
            return False
        await self.store.set_authenticated(True)
        logger.info("Admin login for %r", username)
        return True

    async def logout(self) -> None:
        await self.store.set_authenticated(False)

    async def is_admin(self) -> bool:
        return await self.store.get_authenticated()

    async def require_admin(self) -> None:
        """Raises NotAuthenticatedError unless the admin flag is set."""
        if not await self.store.get_authenticated():
            raise NotAuthenticatedError()

    # ─────────────────────────────────────────────────────────────────────
    # Bulk import / export
    # ─────────────────────────────────────────────────────────────────────

    async def import_csv(self, text: str, tab: Optional[Tab] = None) -> ImportResult:
        """Import a CSV file, all or nothing at the validation level.

        Any invalid row blocks the whole file. Valid files are added one
        record at a time; a record the store rejects is logged and counted
        without stopping the rest.

        Args:
            text: CSV file contents
            tab: Only import records belonging to this tab

        Raises:
            FormatError: If the file structure is unusable
        """
        parsed = csv_codec.parse(text)
        if parsed.errors:
            logger.warning("Import blocked by %d invalid row(s)", len(parsed.errors))
            return ImportResult(errors=parsed.errors)

        result = ImportResult()
        for vehicle in parsed.records:
            if tab is not None and not tab.matches(
                vehicle.category.value, vehicle.condition.value
            ):
                result.skipped += 1
                continue
            try:
                await self.store.add(vehicle)
            except StoreError as e:
                logger.error("Failed to import %s: %s", vehicle.id, e.message)
                result.failed += 1
            else:
                result.added += 1

        logger.info("Import finished: %s", result.summary)
        return result

    async def export_csv(self) -> str:
        """Serialize every stored record.

        Raises:
            EmptyExportError: If the store is empty
        """
        return csv_codec.export_all(await self.store.get_all())

    @staticmethod
    def template_csv() -> str:
        return csv_codec.generate_template()

    # ─────────────────────────────────────────────────────────────────────
    # Single-record management
    # ─────────────────────────────────────────────────────────────────────

    async def list_vehicles(self) -> list[Vehicle]:
        return await self.store.get_all()

    async def get_vehicle(self, vehicle_id: str) -> Vehicle:
        vehicle = await self.store.get(vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError(vehicle_id)
        return vehicle

    async def add_vehicle(self, fields: Mapping[str, object]) -> Vehicle:
        """Validate admin form input and store it as a new listing.

        Raises:
            RowValidationError: If the input is invalid
            DuplicateKeyError: If the generated id collides
        """
        row = csv_codec.fields_to_row(
            {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        )
        vehicle = csv_codec.row_to_vehicle(row)
        await self.store.add(vehicle)
        logger.info("Added vehicle %s (%s)", vehicle.id, vehicle.title)
        return vehicle

    async def update_vehicle(self, vehicle_id: str, fields: Mapping[str, object]) -> Vehicle:
        """Replace a listing with edited values.

        ``id`` and ``created_at`` are preserved; ``updated_at`` is refreshed.

        Raises:
            VehicleNotFoundError: If no listing has this id
            RowValidationError: If the edited values are invalid
        """
        existing = await self.get_vehicle(vehicle_id)

        merged = existing.model_dump(mode="json", include=set(EDITABLE_FIELDS))
        merged.update(
            {k: csv_codec.cell_text(v).strip() for k, v in fields.items() if k in EDITABLE_FIELDS}
        )

        errors = csv_codec.validate(csv_codec.fields_to_row(merged))
        if errors:
            raise RowValidationError(errors)

        updated = Vehicle(
            **merged,
            id=existing.id,
            created_at=existing.created_at,
            updated_at=utcnow(),
        )
        await self.store.update(updated)
        logger.info("Updated vehicle %s", vehicle_id)
        return updated

    async def delete_vehicle(self, vehicle_id: str) -> bool:
        deleted = await self.store.delete_by_id(vehicle_id)
        logger.info("Delete vehicle %s: %s", vehicle_id, "done" if deleted else "not found")
        return deleted

    async def clear_all(self) -> None:
        await self.store.clear_all()
        logger.info("Cleared all vehicles")

    # ─────────────────────────────────────────────────────────────────────
    # Public listing
    # ─────────────────────────────────────────────────────────────────────

    async def browse(
        self,
        selection: CatalogSelection,
        feed_dir: Optional[Path] = None,
    ) -> CatalogView:
        """Render one selection over stored records plus any feed files."""
        records = normalize_all(await self.store.get_all())
        feed_dir = feed_dir or self.settings.feed_dir
        if feed_dir:
            records.extend(load_feed_dir(feed_dir))

        page = query(records, selection, self.settings.page_size)
        options = filter_options(
            records,
            selection.tab,
            self.settings.allowed_brands(selection.tab.category),
        )
        return CatalogView(selection=selection, page=page, options=options)
