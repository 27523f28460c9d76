"""Run async catalog operations from synchronous CLI commands."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer

from autokatalog.cli.ui import console, error_panel
from autokatalog.core.config import ConfigManager
from autokatalog.core.service import CatalogService
from autokatalog.exceptions import AutokatalogError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_service() -> CatalogService:
    """Service on the configured store. One per command invocation."""
    settings = ConfigManager().load()
    return CatalogService.from_settings(settings)


def run_with_service(
    operation: Callable[[CatalogService], Awaitable[T]],
    admin: bool = False,
) -> T:
    """Open the store, run ``operation``, close the store.

    Library errors are shown as an error panel and exit with status 1.

    Args:
        operation: Coroutine function receiving the open service
        admin: Require the admin session flag first
    """

    async def _run() -> T:
        async with build_service() as service:
            if admin:
                await service.require_admin()
            return await operation(service)

    try:
        return asyncio.run(_run())
    except typer.Exit:
        raise
    except AutokatalogError as e:
        console.print()
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print()
        console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print()
        console.print(error_panel("Unexpected error.", str(e)))
        raise typer.Exit(1)
