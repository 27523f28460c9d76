"""Application settings model."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from autokatalog.models.vehicle import Category

DEFAULT_CAR_BRANDS = [
    "BMW",
    "Daihatsu",
    "Honda",
    "Mazda",
    "Mitsubishi",
    "Nissan",
    "Suzuki",
    "Toyota",
]
DEFAULT_MOTORCYCLE_BRANDS = ["KTM", "Kawasaki", "Vespa", "Yamaha"]


class CatalogSettings(BaseModel):
    """Settings loaded from config.toml."""

    # Schema version for future migrations
    version: int = Field(default=1, description="Config schema version")

    # Storage locations; None falls back to the platform data dir
    data_dir: Optional[Path] = None
    feed_dir: Optional[Path] = None

    page_size: int = Field(default=10, ge=1, le=100)

    # Brands offered as filter options, per vehicle class
    car_brands: list[str] = Field(default_factory=lambda: list(DEFAULT_CAR_BRANDS))
    motorcycle_brands: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MOTORCYCLE_BRANDS)
    )

    # Admin gate for the CLI session flag
    admin_username: str = "admin"
    admin_password: str = "admin123"

    @field_validator("car_brands", "motorcycle_brands")
    @classmethod
    def strip_brands(cls, v: list[str]) -> list[str]:
        return [b.strip() for b in v if b.strip()]

    def allowed_brands(self, category: Category) -> list[str]:
        """Brand allow-list for one vehicle class."""
        if category == Category.MOTORCYCLE:
            return self.motorcycle_brands
        return self.car_brands
