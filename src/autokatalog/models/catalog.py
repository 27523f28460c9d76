"""Browse-side models: tabs, selection state, normalized records, pages."""

import math
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from autokatalog.models.vehicle import Category, Condition


class Tab(str, Enum):
    """Public listing tab: one (category, condition) pair."""

    CAR_NEW = "car-new"
    CAR_USED = "car-used"
    MOTORCYCLE_NEW = "motorcycle-new"
    MOTORCYCLE_USED = "motorcycle-used"

    @property
    def category(self) -> Category:
        return _TAB_PAIRS[self][0]

    @property
    def condition(self) -> Condition:
        return _TAB_PAIRS[self][1]

    @property
    def label(self) -> str:
        """Display label, e.g. 'New Car'."""
        return f"{self.condition.value} {self.category.value}"

    @classmethod
    def from_pair(cls, category: Category, condition: Condition) -> "Tab":
        for tab, pair in _TAB_PAIRS.items():
            if pair == (category, condition):
                return tab
        raise ValueError(f"No tab for {category} / {condition}")

    def matches(self, category: str, condition: str) -> bool:
        """Check a record's category/condition strings against this tab."""
        return category == self.category.value and condition == self.condition.value


_TAB_PAIRS = {
    Tab.CAR_NEW: (Category.CAR, Condition.NEW),
    Tab.CAR_USED: (Category.CAR, Condition.USED),
    Tab.MOTORCYCLE_NEW: (Category.MOTORCYCLE, Condition.NEW),
    Tab.MOTORCYCLE_USED: (Category.MOTORCYCLE, Condition.USED),
}


class CatalogVehicle(BaseModel):
    """A canonical record as seen by the query layer.

    ``year`` and ``price`` are floats and may be NaN when the source value
    was not numeric; NaN never satisfies a range bound.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    brand: str = ""
    model: str = ""
    type: str = ""
    color: str = ""
    year: float = math.nan
    engine_capacity: str = ""
    transmission: str = ""
    location: str = ""
    price: float = math.nan
    category: str = ""
    condition: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def search_text(self) -> str:
        """Lower-cased text matched by free-text search."""
        return f"{self.brand} {self.model} {self.type} {self.color}".lower()


class CatalogFilters(BaseModel):
    """Filter panel values. Empty string means 'not set'."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    search: str = ""
    brand: str = ""
    type: str = ""
    transmission: str = ""
    location: str = ""
    year_min: str = ""
    year_max: str = ""
    price_min: str = ""
    price_max: str = ""

    @property
    def is_empty(self) -> bool:
        return not any(self.model_dump().values())


class CatalogSelection(BaseModel):
    """Complete browse state, replaced as a whole on every change.

    Switching tab or brand tab yields a fresh selection with default filters;
    any filter change sends the user back to page 1.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tab: Tab = Tab.CAR_NEW
    brand: str = ""
    filters: CatalogFilters = Field(default_factory=CatalogFilters)
    page: int = Field(default=1, ge=1)

    def with_tab(self, tab: Tab) -> "CatalogSelection":
        return CatalogSelection(tab=tab)

    def with_brand(self, brand: str) -> "CatalogSelection":
        return CatalogSelection(tab=self.tab, brand=brand)

    def with_filters(self, **changes: Any) -> "CatalogSelection":
        filters = CatalogFilters.model_validate({**self.filters.model_dump(), **changes})
        return CatalogSelection(tab=self.tab, brand=self.brand, filters=filters)

    def reset_filters(self) -> "CatalogSelection":
        return CatalogSelection(tab=self.tab)

    def with_page(self, page: int) -> "CatalogSelection":
        return CatalogSelection(
            tab=self.tab, brand=self.brand, filters=self.filters, page=page
        )


class CatalogPage(BaseModel):
    """One page of filtered records."""

    items: list[CatalogVehicle] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


class FilterOptions(BaseModel):
    """Selectable values for the filter panel of one tab."""

    brands: list[str] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)
    transmissions: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)


class CatalogView(BaseModel):
    """Everything the listing page needs to render one selection."""

    selection: CatalogSelection
    page: CatalogPage
    options: FilterOptions
