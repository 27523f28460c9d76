"""Main CLI application."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from autokatalog import __version__
from autokatalog.logging import setup_logging
from autokatalog.models import Tab

app = typer.Typer(
    name="autokatalog",
    help="Manage and browse a vehicle sales catalog from the command line.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


def _vehicle_fields(**options: Optional[str]) -> dict[str, str]:
    """Keep only the field options the user actually passed."""
    return {name: value for name, value in options.items() if value is not None}


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
    ),
) -> None:
    """autokatalog - Vehicle catalog admin and listing CLI."""
    if version:
        console.print(f"autokatalog v{__version__}")
        raise typer.Exit()
    setup_logging()


@app.command()
def template(
    output: Path = typer.Option(None, "--output", "-o", help="Where to write the template"),
) -> None:
    """Write a sample CSV import template."""
    from autokatalog.cli.commands.transfer import run_template

    run_template(output=output)


@app.command("import")
def import_(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV file to import"),
    tab: Tab = typer.Option(None, "--tab", help="Only import rows for this tab"),
) -> None:
    """Import vehicles from a CSV file (admin)."""
    from autokatalog.cli.commands.transfer import run_import

    run_import(file, tab=tab)


@app.command()
def export(
    output: Path = typer.Option(None, "--output", "-o", help="Where to write the export"),
) -> None:
    """Export all vehicles to CSV (admin)."""
    from autokatalog.cli.commands.transfer import run_export

    run_export(output=output)


@app.command()
def vehicles(
    delete: str = typer.Option(None, "--delete", help="Delete a vehicle by id"),
    clear: bool = typer.Option(False, "--clear", help="Delete all vehicles"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """List or delete stored vehicles (admin)."""
    from autokatalog.cli.commands.vehicles import run_vehicles

    run_vehicles(delete=delete, clear=clear, yes=yes)


@app.command()
def add(
    brand: str = typer.Option(..., "--brand", help="Brand (merk)"),
    model: str = typer.Option(..., "--model", help="Model name"),
    year: str = typer.Option(..., "--year", help="Model year"),
    price: str = typer.Option(..., "--price", help="Price in Rupiah"),
    category: str = typer.Option("Car", "--category", help="Car or Motorcycle"),
    condition: str = typer.Option("New", "--condition", help="New or Used"),
    type: str = typer.Option(None, "--type", help="Body type"),
    color: str = typer.Option(None, "--color", help="Colour"),
    engine_capacity: str = typer.Option(None, "--cc", help="Engine capacity"),
    transmission: str = typer.Option(None, "--transmission", help="Transmission"),
    location: str = typer.Option(None, "--location", help="Location"),
) -> None:
    """Add a single vehicle (admin)."""
    from autokatalog.cli.commands.vehicles import run_add

    run_add(
        _vehicle_fields(
            brand=brand,
            model=model,
            year=year,
            price=price,
            category=category,
            condition=condition,
            type=type,
            color=color,
            engine_capacity=engine_capacity,
            transmission=transmission,
            location=location,
        )
    )


@app.command()
def edit(
    vehicle_id: str = typer.Argument(..., help="Id of the vehicle to edit"),
    brand: str = typer.Option(None, "--brand", help="Brand (merk)"),
    model: str = typer.Option(None, "--model", help="Model name"),
    year: str = typer.Option(None, "--year", help="Model year"),
    price: str = typer.Option(None, "--price", help="Price in Rupiah"),
    category: str = typer.Option(None, "--category", help="Car or Motorcycle"),
    condition: str = typer.Option(None, "--condition", help="New or Used"),
    type: str = typer.Option(None, "--type", help="Body type"),
    color: str = typer.Option(None, "--color", help="Colour"),
    engine_capacity: str = typer.Option(None, "--cc", help="Engine capacity"),
    transmission: str = typer.Option(None, "--transmission", help="Transmission"),
    location: str = typer.Option(None, "--location", help="Location"),
) -> None:
    """Edit fields of a stored vehicle (admin)."""
    from autokatalog.cli.commands.vehicles import run_edit

    run_edit(
        vehicle_id,
        _vehicle_fields(
            brand=brand,
            model=model,
            year=year,
            price=price,
            category=category,
            condition=condition,
            type=type,
            color=color,
            engine_capacity=engine_capacity,
            transmission=transmission,
            location=location,
        ),
    )


@app.command()
def browse(
    tab: Tab = typer.Option(Tab.CAR_NEW, "--tab", help="Listing tab"),
    brand: str = typer.Option(None, "--brand", help="Brand tab"),
    search: str = typer.Option(None, "--search", "-s", help="Free-text search"),
    type: str = typer.Option(None, "--type", help="Exact body type"),
    transmission: str = typer.Option(None, "--transmission", help="Exact transmission"),
    location: str = typer.Option(None, "--location", help="Exact location"),
    year_min: str = typer.Option(None, "--year-min", help="Minimum year"),
    year_max: str = typer.Option(None, "--year-max", help="Maximum year"),
    price_min: str = typer.Option(None, "--price-min", help="Minimum price"),
    price_max: str = typer.Option(None, "--price-max", help="Maximum price"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
    feed_dir: Path = typer.Option(
        None, "--feed-dir", file_okay=False, help="Extra JSON listing feeds"
    ),
) -> None:
    """Browse public listings."""
    from autokatalog.cli.commands.browse import run_browse

    run_browse(
        tab=tab,
        brand=brand,
        page=page,
        feed_dir=feed_dir,
        search=search,
        type=type,
        transmission=transmission,
        location=location,
        year_min=year_min,
        year_max=year_max,
        price_min=price_min,
        price_max=price_max,
    )


@app.command()
def login(
    username: str = typer.Option(None, "--username", "-u", help="Admin username"),
    password: str = typer.Option(None, "--password", help="Admin password"),
) -> None:
    """Log in as admin."""
    from autokatalog.cli.commands.session import run_login

    run_login(username=username, password=password)


@app.command()
def logout() -> None:
    """Log out of the admin session."""
    from autokatalog.cli.commands.session import run_logout

    run_logout()


if __name__ == "__main__":
    app()
