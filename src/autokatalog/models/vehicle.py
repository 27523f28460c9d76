"""Vehicle listing data model."""

import math
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Category(str, Enum):
    """Vehicle class."""

    CAR = "Car"
    MOTORCYCLE = "Motorcycle"


class Condition(str, Enum):
    """Listing condition."""

    NEW = "New"
    USED = "Used"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def strip_thousands(value: str) -> str:
    """Remove thousands separators from a numeric literal."""
    return value.replace(",", "")


def is_numeric(value: str) -> bool:
    """Return True if value parses as a finite number."""
    try:
        number = float(value.strip())
    except ValueError:
        return False
    return math.isfinite(number)


def generate_vehicle_id(index: Optional[int] = None) -> str:
    """Build a listing id from the current millisecond timestamp.

    Bulk imports pass the row index so rows parsed within the same
    millisecond still get distinct ids.
    """
    stamp = int(time.time() * 1000)
    if index is None:
        return f"vehicle_{stamp}"
    return f"vehicle_{stamp}_{index}"


class Vehicle(BaseModel):
    """A vehicle listing as persisted in the record store.

    ``year`` and ``price`` stay numeric-literal strings; the query layer
    coerces them to numbers (see ``autokatalog.catalog.normalize``).
    """

    id: str = Field(..., min_length=1)
    brand: str
    model: str
    type: str = ""
    color: str = ""
    year: str
    engine_capacity: str = ""
    transmission: str = ""
    location: str = ""
    price: str = Field(..., description="Integer literal, thousands separators allowed")
    category: Category
    condition: Condition
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("id", "type", "color", "engine_capacity", "transmission", "location")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Trim surrounding whitespace."""
        return v.strip()

    @field_validator("brand", "model", "year", "price")
    @classmethod
    def require_text(cls, v: str) -> str:
        """Required fields must be non-blank after trimming."""
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator(
        "id", "brand", "model", "type", "color", "year", "engine_capacity",
        "transmission", "location", "price",
    )
    @classmethod
    def single_line(cls, v: str) -> str:
        """Text fields are exported one record per line."""
        if "\n" in v or "\r" in v:
            raise ValueError("must be a single line")
        return v

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: str) -> str:
        if not is_numeric(v):
            raise ValueError("year must be a number")
        return v

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: str) -> str:
        if not is_numeric(strip_thousands(v)):
            raise ValueError("price must be a number")
        return v

    @property
    def title(self) -> str:
        """Display title, e.g. 'Toyota Avanza 1.5 G'."""
        return f"{self.brand} {self.model}"

    def touch(self) -> "Vehicle":
        """Return a copy with ``updated_at`` refreshed."""
        return self.model_copy(update={"updated_at": utcnow()})
