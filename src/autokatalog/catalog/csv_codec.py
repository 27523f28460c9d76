"""CSV import/export for vehicle listings.

Import files use the Indonesian column names used by the dealership admin template
(``merk``, ``tahun``, ``harga``, ...). Parsing is line based: blank lines are
ignored, the first remaining line is the header, and every later line is one
listing. Structural problems raise ``FormatError``; problems inside a row
are collected as ``"Row <n>: ..."`` strings and never abort the batch.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Optional

from autokatalog.exceptions import EmptyExportError, FormatError, RowValidationError
from autokatalog.models.results import ParseResult
from autokatalog.models.vehicle import (
    Category,
    Condition,
    Vehicle,
    generate_vehicle_id,
    is_numeric,
    strip_thousands,
    utcnow,
)

logger = logging.getLogger(__name__)

# Untyped row straight out of the file: column name → trimmed cell text
RawRow = dict[str, str]

IMPORT_HEADERS = [
    "merk",
    "model",
    "tipe",
    "warna",
    "tahun",
    "cc",
    "transmisi",
    "lokasi",
    "harga",
    "kategori",
    "kondisi",
]
EXPORT_HEADERS = ["id", *IMPORT_HEADERS, "created_at", "updated_at"]

# CSV column → Vehicle field
COLUMN_FIELDS = {
    "id": "id",
    "merk": "brand",
    "model": "model",
    "tipe": "type",
    "warna": "color",
    "tahun": "year",
    "cc": "engine_capacity",
    "transmisi": "transmission",
    "lokasi": "location",
    "harga": "price",
    "kategori": "category",
    "kondisi": "condition",
}
FIELD_COLUMNS = {field: column for column, field in COLUMN_FIELDS.items()}

REQUIRED_COLUMNS = ("merk", "model", "tahun", "harga")
CATEGORY_VALUES = tuple(c.value for c in Category)
CONDITION_VALUES = tuple(c.value for c in Condition)

TEMPLATE_FILENAME = "vehicle_template.csv"
TEMPLATE_ROWS = [
    ["Toyota", "Avanza 1.5 G", "MPV", "Hitam", "2024", "1500", "CVT", "Jakarta", "255000000", "Car", "New"],
    ["Honda", "PCX 160 ABS", "Matic", "Putih", "2024", "160", "Automatic", "Surabaya", "35000000", "Motorcycle", "New"],
    ["Suzuki", "Ertiga GX", "MPV", "Silver", "2024", "1500", "Manual", "Bandung", "240000000", "Car", "New"],
]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def split_line(line: str) -> list[str]:
    """Split one CSV line into unquoted, trimmed cells.

    A double-quoted cell may contain commas (e.g. ``"255,000,000"``) and
    doubled quotes (``"17"" wheels"``).
    """
    cells = next(csv.reader([line], skipinitialspace=True), [])
    return [cell.strip() for cell in cells]


def parse(text: str) -> ParseResult:
    """Parse CSV text into validated vehicles plus per-row errors.

    Raises:
        FormatError: If there is no data row or a required header is missing
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        raise FormatError("CSV file must have at least a header row and one data row")

    headers = split_line(lines[0])
    missing = [h for h in IMPORT_HEADERS if h not in headers]
    if missing:
        raise FormatError(f"Missing required headers: {', '.join(missing)}")

    result = ParseResult()
    for index, line in enumerate(lines[1:], start=1):
        cells = split_line(line)
        row: RawRow = {
            header: cells[i] if i < len(cells) else ""
            for i, header in enumerate(headers)
        }
        try:
            result.records.append(row_to_vehicle(row, index))
        except RowValidationError as e:
            # Row numbers count the header line, as spreadsheet users see them
            result.errors.append(f"Row {index + 1}: {e.details}")

    logger.info(
        "Parsed CSV: %d valid row(s), %d rejected",
        len(result.records),
        len(result.errors),
    )
    return result


def validate(row: Mapping[str, str]) -> list[str]:
    """Check one raw row. Returns error messages; empty means valid."""
    errors = []

    # Parsing is line based, so a cell must never span lines
    for column, value in row.items():
        if value and ("\n" in value or "\r" in value):
            errors.append(f"{column} must be a single line")

    for column in REQUIRED_COLUMNS:
        if not (row.get(column) or "").strip():
            errors.append(f"{column} is required")

    if (row.get("kategori") or "").strip() not in CATEGORY_VALUES:
        errors.append(f"kategori must be {' or '.join(CATEGORY_VALUES)}")
    if (row.get("kondisi") or "").strip() not in CONDITION_VALUES:
        errors.append(f"kondisi must be {' or '.join(CONDITION_VALUES)}")

    year = (row.get("tahun") or "").strip()
    if year and not is_numeric(year):
        errors.append("tahun must be a number")

    price = (row.get("harga") or "").strip()
    if price and not is_numeric(strip_thousands(price)):
        errors.append("harga must be a number")

    return errors


def row_to_vehicle(
    row: Mapping[str, str],
    index: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Vehicle:
    """Turn a raw row into a Vehicle stamped with fresh timestamps.

    A supplied ``id`` column is kept; otherwise one is generated.

    Raises:
        RowValidationError: If ``validate`` reports any problem
    """
    errors = validate(row)
    if errors:
        raise RowValidationError(errors)

    now = now or utcnow()
    fields = {
        field: (row.get(column) or "").strip()
        for column, field in COLUMN_FIELDS.items()
    }
    fields["id"] = fields["id"] or generate_vehicle_id(index)
    return Vehicle(**fields, created_at=now, updated_at=now)


def cell_text(value: object) -> str:
    """Text of one form value; enum members give their value."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def fields_to_row(fields: Mapping[str, object]) -> RawRow:
    """Map Vehicle field names (admin form input) onto CSV column names."""
    return {
        FIELD_COLUMNS[field]: cell_text(value)
        for field, value in fields.items()
        if field in FIELD_COLUMNS and value is not None
    }


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _write_rows(header: list[str], rows: list[list[str]]) -> str:
    buffer = io.StringIO()
    buffer.write(",".join(header) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def generate_template() -> str:
    """Header plus sample rows, every sample cell quoted."""
    return _write_rows(IMPORT_HEADERS, TEMPLATE_ROWS)


def vehicle_to_row(vehicle: Vehicle) -> list[str]:
    return [
        vehicle.id,
        vehicle.brand,
        vehicle.model,
        vehicle.type or "",
        vehicle.color or "",
        vehicle.year,
        vehicle.engine_capacity or "",
        vehicle.transmission or "",
        vehicle.location or "",
        vehicle.price,
        vehicle.category.value,
        vehicle.condition.value,
        (vehicle.created_at or utcnow()).isoformat(),
        (vehicle.updated_at or utcnow()).isoformat(),
    ]


def export_all(records: list[Vehicle]) -> str:
    """Serialize records in the canonical export format.

    Raises:
        EmptyExportError: If there is nothing to export
    """
    if not records:
        raise EmptyExportError()
    return _write_rows(EXPORT_HEADERS, [vehicle_to_row(v) for v in records])


def export_filename(today: Optional[date] = None) -> str:
    """Download name for an export, e.g. ``vehicle_data_2024-05-01.csv``."""
    today = today or utcnow().date()
    return f"vehicle_data_{today.isoformat()}.csv"
