"""Vehicles management command implementation."""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from autokatalog.cli.runtime import run_with_service
from autokatalog.cli.ui import create_vehicle_table, error_panel, success_panel
from autokatalog.core.service import CatalogService
from autokatalog.models import Vehicle

logger = logging.getLogger(__name__)
console = Console()


def run_vehicles(
    delete: Optional[str] = None,
    clear: bool = False,
    yes: bool = False,
) -> None:
    """Run the vehicles management command."""
    console.print()

    if delete:
        _handle_delete(delete, yes)
    elif clear:
        _handle_clear(yes)
    else:
        _handle_list()


def _handle_list() -> None:
    """Display all stored vehicles."""

    async def _list(service: CatalogService) -> list[Vehicle]:
        return await service.list_vehicles()

    vehicles = run_with_service(_list, admin=True)
    if not vehicles:
        console.print(
            "[dim]  No vehicles yet. Add one with 'autokatalog add' or import a CSV.[/dim]"
        )
        return

    console.print(create_vehicle_table(vehicles))
    console.print()
    console.print(f"[dim]  {len(vehicles)} vehicle(s) stored.[/dim]")


def _handle_delete(vehicle_id: str, yes: bool) -> None:
    """Delete one vehicle by id."""
    if not yes and not Confirm.ask(f"  Delete vehicle [bold]{escape(vehicle_id)}[/bold]?", default=False):
        console.print("[dim]  Cancelled.[/dim]")
        return

    async def _delete(service: CatalogService) -> bool:
        return await service.delete_vehicle(vehicle_id)

    if not run_with_service(_delete, admin=True):
        console.print()
        console.print(error_panel(f"Vehicle '{vehicle_id}' not found."))
        raise typer.Exit(1)

    console.print()
    console.print(success_panel(f"Vehicle {escape(vehicle_id)} deleted."))


def _handle_clear(yes: bool) -> None:
    """Delete every stored vehicle."""
    if not yes and not Confirm.ask(
        "  Delete ALL vehicles? This cannot be undone.", default=False
    ):
        console.print("[dim]  Cancelled.[/dim]")
        return

    async def _clear(service: CatalogService) -> None:
        await service.clear_all()

    run_with_service(_clear, admin=True)
    console.print()
    console.print(success_panel("All vehicles deleted."))


def run_add(fields: dict[str, str]) -> None:
    """Add one vehicle from command-line fields.

    Validation failures surface as an error panel listing each problem.
    """
    console.print()

    async def _add(service: CatalogService) -> Vehicle:
        return await service.add_vehicle(fields)

    vehicle = run_with_service(_add, admin=True)
    console.print(success_panel(f"Vehicle {escape(vehicle.title)} added as {escape(vehicle.id)}."))


def run_edit(vehicle_id: str, fields: dict[str, str]) -> None:
    """Update fields of one stored vehicle."""
    console.print()
    if not fields:
        console.print(error_panel("Nothing to change.", "Pass at least one field option."))
        raise typer.Exit(1)

    async def _edit(service: CatalogService) -> Vehicle:
        return await service.update_vehicle(vehicle_id, fields)

    vehicle = run_with_service(_edit, admin=True)
    console.print(success_panel(f"Vehicle {escape(vehicle.id)} updated."))
