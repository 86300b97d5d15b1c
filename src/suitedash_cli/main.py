"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio

import structlog
import typer
from rich.console import Console
from rich.table import Table

from suitedash_client.api import create_api
from suitedash_client.controllers.detail_controller import DetailController
from suitedash_client.controllers.list_controller import PaginatedListController
from suitedash_client.controllers.screens import SCREEN_CONFIGS
from suitedash_client.observability import (
    bind_resource_context,
    clear_resource_context,
    configure_logging,
)
from suitedash_client.session import ConnectionMonitor, ConnectionState
from suitedash_core.config.settings import Settings
from suitedash_core.constants import VERSION
from suitedash_core.models.resource import ResourceType
from suitedash_core.state import DetailState, DetailStatus, ListState, ListStatus

app = typer.Typer(
    name="suitedash",
    help="Browse SuiteDash contacts, projects, files and tasks",
)
console = Console()
logger = structlog.get_logger()


def _load_settings(verbose: bool) -> Settings:
    """Read settings from the environment and configure logging."""
    settings = Settings()  # type: ignore[call-arg]
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)
    return settings


@app.command("list")
def list_resources(
    resource: ResourceType = typer.Argument(..., help="contacts, projects, files or tasks"),
    pages: int = typer.Option(1, "--pages", min=1, help="Pages to load, stopping at the last"),
    page_size: int | None = typer.Option(
        None, "--page-size", min=1, help="Items per page (default from the screen)"
    ),
    refresh: bool = typer.Option(False, "--refresh", help="Bypass the response cache"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """List a resource collection page by page."""
    settings = _load_settings(verbose)
    config = SCREEN_CONFIGS[resource]
    state = asyncio.run(
        _load_list(
            settings,
            resource,
            pages=pages,
            page_size=page_size or config.page_size,
            refresh=refresh,
        )
    )

    if state.shows_error_screen:
        console.print(f"[red]Error:[/red] {config.error_text}")
        raise typer.Exit(code=1)

    if state.showing_stale or state.status == ListStatus.ERROR:
        console.print(f"[yellow]Showing last known data:[/yellow] {state.last_error}")
    elif state.last_error is not None:
        console.print(f"[yellow]Stopped loading more:[/yellow] {state.last_error}")

    if not state.items:
        console.print(config.empty_text)
        return

    table = Table(title=resource.value.capitalize())
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Details")
    for item in state.items:
        table.add_row(
            str(item.get("id", "")),
            config.row_title(item),
            config.row_subtitle(item),
        )
    console.print(table)
    more = "yes" if state.has_more else "no"
    console.print(
        f"[dim]{len(state.items)} items, {state.current_page} page(s) loaded, more: {more}[/dim]"
    )


@app.command()
def show(
    resource: ResourceType = typer.Argument(..., help="contacts, projects, files or tasks"),
    resource_id: str = typer.Argument(..., help="Resource ID"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the response cache"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Show one resource."""
    settings = _load_settings(verbose)
    state = asyncio.run(_load_detail(settings, resource, resource_id, use_cache=not no_cache))

    if state.status == DetailStatus.ERROR:
        console.print(f"[red]Error:[/red] {state.error_message}")
        raise typer.Exit(code=1)
    if state.resource is None:
        singular = resource.value.removesuffix("s").capitalize()
        console.print(f"[yellow]{singular} not found.[/yellow]")
        raise typer.Exit(code=1)

    table = Table(show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for field_name, value in state.resource.model_dump(exclude_none=True).items():
        table.add_row(field_name, str(value))
    console.print(table)


@app.command("clear-cache")
def clear_cache(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Drop every cached API response so the next read hits the server."""
    settings = _load_settings(verbose)
    removed = asyncio.run(_clear_cache(settings))
    console.print(f"[green]Cleared {removed} cached responses[/green]")


@app.command("check-auth")
def check_auth(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Verify the configured API credentials."""
    settings = _load_settings(verbose)
    state = asyncio.run(_check_connection(settings))
    if not state.is_authenticated:
        console.print(f"[red]Error:[/red] {state.error}")
        raise typer.Exit(code=1)
    console.print("[green]Connected to SuiteDash[/green]")


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"suitedash-client v{VERSION}")


async def _load_list(
    settings: Settings,
    resource: ResourceType,
    *,
    pages: int,
    page_size: int,
    refresh: bool,
) -> ListState:
    """Mount a list controller and scroll until ``pages`` are loaded or the list ends."""
    api = create_api(settings)
    controller = PaginatedListController(
        api.resource(resource), api.snapshots, page_size=page_size
    )
    bind_resource_context(resource.value)
    try:
        if refresh:
            await controller.refresh()
        else:
            await controller.mount()

        state = controller.state
        while state.status == ListStatus.READY and state.has_more and state.current_page < pages:
            loaded = state.current_page
            await controller.load_more()
            if state.current_page == loaded:
                logger.warning("list_scroll_stopped", page=loaded + 1)
                break
        return state
    finally:
        controller.unmount()
        clear_resource_context()
        await api.aclose()


async def _load_detail(
    settings: Settings,
    resource: ResourceType,
    resource_id: str,
    *,
    use_cache: bool,
) -> DetailState:
    """Load one resource through a detail controller."""
    api = create_api(settings)
    controller = DetailController(api.resource(resource), resource_id)
    try:
        return await controller.load(use_cache=use_cache)
    finally:
        controller.unmount()
        await api.aclose()


async def _clear_cache(settings: Settings) -> int:
    api = create_api(settings)
    try:
        return await api.clear_cache()
    finally:
        await api.aclose()


async def _check_connection(settings: Settings) -> ConnectionState:
    api = create_api(settings)
    try:
        return await ConnectionMonitor(api).connect()
    finally:
        await api.aclose()


if __name__ == "__main__":
    app()
