"""Catalog query engine: tab/brand/filter predicates and pagination.

Every function takes the full normalized record list and a
``CatalogSelection`` and returns new values; nothing here holds state.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from typing import Optional

from autokatalog.models.catalog import (
    CatalogFilters,
    CatalogPage,
    CatalogSelection,
    CatalogVehicle,
    FilterOptions,
    Tab,
)
from autokatalog.models.config import CatalogSettings

DEFAULT_PAGE_SIZE = 10

Predicate = Callable[[CatalogVehicle], bool]


def parse_bound(value: str) -> Optional[float]:
    """Parse a range bound typed by the user; None when empty or not numeric."""
    text = value.replace(",", "").strip()
    if not text:
        return None
    try:
        bound = float(text)
    except ValueError:
        return None
    return bound if math.isfinite(bound) else None


def in_tab(tab: Tab) -> Predicate:
    return lambda v: tab.matches(v.category, v.condition)


def _filter_predicates(filters: CatalogFilters) -> list[Predicate]:
    predicates: list[Predicate] = []

    if filters.search:
        term = filters.search.lower()
        predicates.append(lambda v: term in v.search_text)

    # Exact-match dropdowns
    for field in ("brand", "type", "transmission", "location"):
        wanted = getattr(filters, field)
        if wanted:
            predicates.append(lambda v, f=field, w=wanted: getattr(v, f) == w)

    # Range bounds; NaN compares False so unparsable values never pass
    ranges = (
        ("year", filters.year_min, lambda value, bound: value >= bound),
        ("year", filters.year_max, lambda value, bound: value <= bound),
        ("price", filters.price_min, lambda value, bound: value >= bound),
        ("price", filters.price_max, lambda value, bound: value <= bound),
    )
    for field, raw, compare in ranges:
        bound = parse_bound(raw)
        if bound is not None:
            predicates.append(
                lambda v, f=field, b=bound, c=compare: c(getattr(v, f), b)
            )

    return predicates


def filter_vehicles(
    records: Iterable[CatalogVehicle],
    selection: CatalogSelection,
) -> list[CatalogVehicle]:
    """Apply the selection's tab, brand tab and filters (all AND-ed).

    Results are ordered by id so pages stay stable between calls.
    """
    predicates = [in_tab(selection.tab)]
    if selection.brand:
        predicates.append(lambda v: v.brand == selection.brand)
    predicates.extend(_filter_predicates(selection.filters))

    matched = [v for v in records if all(p(v) for p in predicates)]
    return sorted(matched, key=lambda v: v.id)


def paginate(
    items: Sequence[CatalogVehicle],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> CatalogPage:
    """Slice one page. A page past the end is empty, not an error."""
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    start = (page - 1) * page_size
    return CatalogPage(
        items=list(items[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_count=len(items),
    )


def query(
    records: Iterable[CatalogVehicle],
    selection: CatalogSelection,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> CatalogPage:
    """Filter then paginate at the selection's current page."""
    return paginate(filter_vehicles(records, selection), selection.page, page_size)


def _distinct(values: Iterable[str]) -> list[str]:
    return sorted({v for v in values if v})


def brand_options(
    records: Iterable[CatalogVehicle],
    tab: Tab,
    allowed: Optional[Iterable[str]] = None,
) -> list[str]:
    """Brands selectable on a tab.

    Only brands that appear among the tab's own records and belong to the
    allow-list of the tab's vehicle class are offered, so a motorcycle brand
    never shows up on a car tab.
    """
    if allowed is None:
        allowed = CatalogSettings().allowed_brands(tab.category)
    allowed_set = set(allowed)
    matches = in_tab(tab)
    return _distinct(v.brand for v in records if matches(v) and v.brand in allowed_set)


def filter_options(
    records: Iterable[CatalogVehicle],
    tab: Tab,
    allowed_brands: Optional[Iterable[str]] = None,
) -> FilterOptions:
    """Dropdown values for the filter panel of one tab."""
    records = list(records)
    matches = in_tab(tab)
    tab_records = [v for v in records if matches(v)]
    return FilterOptions(
        brands=brand_options(tab_records, tab, allowed_brands),
        types=_distinct(v.type for v in tab_records),
        transmissions=_distinct(v.transmission for v in tab_records),
        locations=_distinct(v.location for v in tab_records),
    )
