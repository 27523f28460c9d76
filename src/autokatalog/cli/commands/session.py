"""Admin login/logout command implementation."""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.prompt import Prompt

from autokatalog.cli.runtime import run_with_service
from autokatalog.cli.ui import error_panel, success_panel
from autokatalog.core.service import CatalogService

logger = logging.getLogger(__name__)
console = Console()


def run_login(username: Optional[str] = None, password: Optional[str] = None) -> None:
    """Run the login command."""
    console.print()
    if username is None:
        username = Prompt.ask("  Username")
    if password is None:
        password = Prompt.ask("  Password", password=True)

    async def _login(service: CatalogService) -> bool:
        return await service.login(username, password)

    if not run_with_service(_login):
        console.print()
        console.print(error_panel("Invalid username or password."))
        raise typer.Exit(1)

    console.print()
    console.print(success_panel("Logged in as admin."))


def run_logout() -> None:
    """Run the logout command."""

    async def _logout(service: CatalogService) -> None:
        await service.logout()

    run_with_service(_logout)
    console.print()
    console.print(success_panel("Logged out."))
