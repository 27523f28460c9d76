"""Rich console UI helpers."""

import math
from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from autokatalog.models import CatalogVehicle, Vehicle

console = Console()


def success_panel(message: str) -> Panel:
    """Create a success message panel."""
    return Panel(
        f"[green]\u2713[/green] {message}",
        border_style="green",
        padding=(0, 1),
    )


def error_panel(message: str, details: str | None = None) -> Panel:
    """Create an error message panel."""
    content = f"[red]\u2717[/red] {escape(message)}"
    if details:
        content += f"\n\n[dim]{escape(details)}[/dim]"
    return Panel(
        content,
        title="Error",
        border_style="red",
        padding=(0, 1),
    )


def warning_panel(message: str) -> Panel:
    """Create a warning message panel."""
    return Panel(
        f"[yellow]\u26a0[/yellow] {message}",
        border_style="yellow",
        padding=(0, 1),
    )


def info_panel(message: str, title: str | None = None) -> Panel:
    """Create an info message panel."""
    return Panel(
        message,
        title=title,
        border_style="blue",
        padding=(1, 2),
    )


def format_price(price: float | str) -> str:
    """Format a price in Rupiah, e.g. 'Rp 255.000.000'."""
    if isinstance(price, str):
        try:
            price = float(price.replace(",", ""))
        except ValueError:
            return price
    if not math.isfinite(price):
        return "-"
    return "Rp " + f"{round(price):,}".replace(",", ".")


def format_year(year: float) -> str:
    return str(int(year)) if math.isfinite(year) else "-"


def create_vehicle_table(vehicles: Iterable[Vehicle]) -> Table:
    """Admin table of stored records, including ids."""
    table = Table(title="Stored Vehicles", show_lines=False)
    table.add_column("ID", style="dim")
    table.add_column("Vehicle", style="bold")
    table.add_column("Year", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Category")
    table.add_column("Condition")
    table.add_column("Location")

    for v in vehicles:
        table.add_row(
            escape(v.id),
            escape(v.title),
            escape(v.year),
            escape(format_price(v.price)),
            v.category.value,
            v.condition.value,
            escape(v.location) if v.location else "[dim]-[/dim]",
        )
    return table


def create_catalog_table(items: Iterable[CatalogVehicle], title: str) -> Table:
    """Public listing table for one page of results."""
    table = Table(title=escape(title), show_lines=False)
    table.add_column("Brand", style="bold")
    table.add_column("Model")
    table.add_column("Type", style="dim")
    table.add_column("Year", justify="right")
    table.add_column("Transmission")
    table.add_column("Location")
    table.add_column("Price", justify="right", style="green")

    for v in items:
        table.add_row(
            escape(v.brand),
            escape(v.model),
            escape(v.type),
            format_year(v.year),
            escape(v.transmission),
            escape(v.location),
            format_price(v.price),
        )
    return table
