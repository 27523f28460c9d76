"""Map raw listing fields from any source onto the canonical record shape.

Feeds and stored records name their fields differently (``merk`` in the
Indonesian feeds and CSV files, ``Brand`` in older exports, ``brand`` in the
record store). Everything here is pure: no validation beyond numeric
coercion, which yields NaN for unparsable input.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from autokatalog.exceptions import FeedError
from autokatalog.models.catalog import CatalogVehicle
from autokatalog.models.vehicle import Category, Condition, Vehicle, strip_thousands

logger = logging.getLogger(__name__)

# Canonical field → source names, first match wins
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "ID"),
    "brand": ("brand", "merk", "Brand", "Merk"),
    "model": ("model", "Produk", "produk", "Model"),
    "type": ("type", "tipe", "Type", "Tipe"),
    "color": ("color", "warna", "Warna"),
    "year": ("year", "tahun", "Tahun"),
    "engine_capacity": ("engine_capacity", "cc", "CC"),
    "transmission": ("transmission", "transmisi", "Transmisi"),
    "location": ("location", "lokasi", "Lokasi"),
    "price": ("price", "harga", "Harga"),
    "category": ("category", "kategori", "Kategori"),
    "condition": ("condition", "kondisi", "Kondisi"),
    "created_at": ("created_at", "createdAt"),
    "updated_at": ("updated_at", "updatedAt"),
}

CATEGORY_ALIASES = {
    "CAR": Category.CAR.value,
    "MOBIL": Category.CAR.value,
    "MOTORCYCLE": Category.MOTORCYCLE.value,
    "MOTOR": Category.MOTORCYCLE.value,
}

CONDITION_ALIASES = {
    "NEW": Condition.NEW.value,
    "BARU": Condition.NEW.value,
    "USED": Condition.USED.value,
    "BEKAS": Condition.USED.value,
}


def to_number(value: Any) -> float:
    """Coerce a numeric literal (thousands separators allowed) to float.

    Returns NaN for anything that does not parse or is not finite.
    """
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return math.nan
    else:
        text = strip_thousands(str(value)).strip()
        if not text:
            return math.nan
        try:
            number = float(text)
        except ValueError:
            return math.nan
    return number if math.isfinite(number) else math.nan


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value)


_DATETIME = TypeAdapter(datetime)


def _timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        return _DATETIME.validate_python(value)
    except ValidationError:
        return None


def _pick(raw: Mapping[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def canonical_category(value: Any) -> str:
    text = _text(value)
    return CATEGORY_ALIASES.get(text.upper(), text)


def canonical_condition(value: Any) -> str:
    text = _text(value)
    return CONDITION_ALIASES.get(text.upper(), text)


def normalize_record(raw: Mapping[str, Any]) -> CatalogVehicle:
    """Normalize one raw feed/store object into a CatalogVehicle."""
    return CatalogVehicle(
        id=_text(_pick(raw, "id")),
        brand=_text(_pick(raw, "brand")),
        model=_text(_pick(raw, "model")),
        type=_text(_pick(raw, "type")),
        color=_text(_pick(raw, "color")),
        year=to_number(_pick(raw, "year")),
        engine_capacity=_text(_pick(raw, "engine_capacity")),
        transmission=_text(_pick(raw, "transmission")),
        location=_text(_pick(raw, "location")),
        price=to_number(_pick(raw, "price")),
        category=canonical_category(_pick(raw, "category")),
        condition=canonical_condition(_pick(raw, "condition")),
        created_at=_timestamp(_pick(raw, "created_at")),
        updated_at=_timestamp(_pick(raw, "updated_at")),
    )


def normalize_vehicle(vehicle: Vehicle) -> CatalogVehicle:
    """Normalize a stored Vehicle."""
    return normalize_record(vehicle.model_dump(mode="json"))


def normalize_all(records: list[Vehicle]) -> list[CatalogVehicle]:
    return [normalize_vehicle(v) for v in records]


# ---------------------------------------------------------------------------
# JSON feeds
# ---------------------------------------------------------------------------


def load_feed(path: Path) -> list[CatalogVehicle]:
    """Load one JSON feed file (a list of raw listing objects).

    A missing file yields no records, matching a feed that has not been
    published yet.

    Raises:
        FeedError: If the file is not valid JSON or not a list of objects
    """
    path = Path(path)
    if not path.exists():
        logger.debug("Feed not found, skipping: %s", path)
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise FeedError(str(path), str(e)) from e

    if not isinstance(data, list) or not all(isinstance(i, dict) for i in data):
        raise FeedError(str(path), "Expected a JSON list of objects")

    records = [normalize_record(item) for item in data]
    logger.debug("Loaded %d records from feed %s", len(records), path)
    return records


def load_feed_dir(directory: Path) -> list[CatalogVehicle]:
    """Load every ``*.json`` feed in a directory, in file-name order."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    records: list[CatalogVehicle] = []
    for path in sorted(directory.glob("*.json")):
        records.extend(load_feed(path))
    return records
