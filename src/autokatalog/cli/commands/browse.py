"""Public catalog browse command implementation."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from autokatalog.cli.runtime import run_with_service
from autokatalog.cli.ui import create_catalog_table
from autokatalog.core.service import CatalogService
from autokatalog.models import CatalogSelection, CatalogView, Tab

logger = logging.getLogger(__name__)
console = Console()


def build_selection(
    tab: Tab = Tab.CAR_NEW,
    brand: Optional[str] = None,
    page: int = 1,
    **filters: Optional[str],
) -> CatalogSelection:
    """Apply options in the order a visitor would: tab, brand, filters, page."""
    selection = CatalogSelection().with_tab(tab)
    if brand:
        selection = selection.with_brand(brand)
    changes = {name: value for name, value in filters.items() if value}
    if changes:
        selection = selection.with_filters(**changes)
    return selection.with_page(page)


def run_browse(
    tab: Tab = Tab.CAR_NEW,
    brand: Optional[str] = None,
    page: int = 1,
    feed_dir: Optional[Path] = None,
    **filters: Optional[str],
) -> None:
    """Run the browse command."""
    selection = build_selection(tab=tab, brand=brand, page=page, **filters)

    async def _browse(service: CatalogService) -> CatalogView:
        return await service.browse(selection, feed_dir=feed_dir)

    view = run_with_service(_browse)
    _display_view(view)


def _display_view(view: CatalogView) -> None:
    selection = view.selection
    result = view.page

    console.print()
    current = selection.brand or "All"
    brands = "  ".join(
        f"[bold reverse] {escape(b)} [/bold reverse]" if b == current else escape(b)
        for b in ["All", *view.options.brands]
    )
    console.print(f"  [dim]Brands:[/dim] {brands}")
    console.print()

    if not result.items:
        console.print(f"[dim]  No {selection.tab.label.lower()} listings match.[/dim]")
        return

    title = selection.tab.label
    if selection.brand:
        title += f" · {selection.brand}"
    console.print(create_catalog_table(result.items, title=title))
    console.print()
    console.print(
        f"[dim]  Page {result.page} of {max(result.total_pages, 1)}"
        f" · {result.total_count} listing(s)[/dim]"
    )
