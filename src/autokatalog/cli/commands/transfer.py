"""CSV template, import and export command implementation."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from autokatalog.catalog.csv_codec import TEMPLATE_FILENAME, export_filename
from autokatalog.cli.runtime import run_with_service
from autokatalog.cli.ui import error_panel, success_panel, warning_panel
from autokatalog.core.service import CatalogService
from autokatalog.models import ImportResult, Tab

logger = logging.getLogger(__name__)
console = Console()

# Cap on row errors printed; the rest are summarized
MAX_SHOWN_ERRORS = 20


def run_template(output: Optional[Path] = None) -> None:
    """Write the sample CSV template."""
    path = output or Path(TEMPLATE_FILENAME)
    path.write_text(CatalogService.template_csv(), encoding="utf-8")
    console.print()
    console.print(success_panel(f"Template written to {escape(str(path))}"))


def run_import(file: Path, tab: Optional[Tab] = None) -> None:
    """Import vehicles from a CSV file."""
    console.print()
    try:
        # utf-8-sig drops the BOM spreadsheet exports put before the header
        text = file.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        console.print(error_panel(f"Cannot read {file}", str(e)))
        raise typer.Exit(1)

    scope = f" into [bold]{tab.label}[/bold]" if tab else ""
    console.print(f"  Importing [bold]{escape(file.name)}[/bold]{scope}...")
    logger.info("Import requested: file=%s tab=%s", file, tab.value if tab else None)

    async def _import(service: CatalogService) -> ImportResult:
        return await service.import_csv(text, tab=tab)

    result = run_with_service(_import, admin=True)
    _display_import(result)
    if not result.ok:
        raise typer.Exit(1)


def _display_import(result: ImportResult) -> None:
    console.print()
    if not result.ok:
        shown = result.errors[:MAX_SHOWN_ERRORS]
        details = "\n".join(shown)
        hidden = len(result.errors) - len(shown)
        if hidden:
            details += f"\n... and {hidden} more"
        console.print(
            error_panel(
                "Import blocked. Fix these rows and upload again; nothing was added.",
                details,
            )
        )
        return

    if result.failed:
        console.print(warning_panel(f"Import finished with problems: {result.summary}"))
    else:
        console.print(success_panel(f"Import finished: {result.summary}"))


def run_export(output: Optional[Path] = None) -> None:
    """Export all stored vehicles to CSV."""

    async def _export(service: CatalogService) -> str:
        return await service.export_csv()

    content = run_with_service(_export, admin=True)
    path = output or Path(export_filename())
    path.write_text(content, encoding="utf-8")

    console.print()
    console.print(success_panel(f"Exported to {escape(str(path))}"))
