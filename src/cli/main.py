"""CLI entrypoint (Typer).

Plays the UI collaborator: drives the screen state holders, renders their
snapshots with Rich and turns failures into an error panel plus exit code 1.
"""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.http_client import build_async_client, build_web_environment
from cli.doctor import app as doctor_app
from cli.ui_components import build_error_panel, build_images_table, build_sections_tree
from core.config import AppSettings
from core.services.breed_browser import BreedDetailScreen, BreedListScreen

app = typer.Typer(no_args_is_help=True, help="Browse the dog.ceo breed catalog.")
app.add_typer(doctor_app, name="doctor")

_console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request (DEBUG)."),
) -> None:
    settings = AppSettings()
    _configure_logging("DEBUG" if verbose else settings.log_level)


async def _load_breeds(settings: AppSettings, search: str) -> BreedListScreen:
    async with build_async_client(settings) as client:
        environment = build_web_environment(settings, transport=client)
        screen = BreedListScreen()
        screen.set_search_text(search)
        screen.reload(environment)
        await screen.wait()
    return screen


async def _load_images(settings: AppSettings, screen: BreedDetailScreen) -> BreedDetailScreen:
    async with build_async_client(settings) as client:
        environment = build_web_environment(settings, transport=client)
        screen.reload(environment)
        await screen.wait()
    return screen


@app.command()
def breeds(
    search: str = typer.Option("", "--search", "-s", help="Case-insensitive substring filter."),
) -> None:
    """List all breeds grouped by initial letter."""

    settings = AppSettings()
    screen = asyncio.run(_load_breeds(settings, search))
    if screen.error is not None:
        _console.print(build_error_panel(screen.error))
        raise typer.Exit(code=1)

    if not screen.filtered_sections:
        _console.print("[yellow]No breeds match the search.[/yellow]")
        return
    _console.print(build_sections_tree(screen.filtered_sections))


@app.command()
def images(
    breed: str = typer.Argument(..., help="Breed name, e.g. 'hound'."),
    subbreed: str | None = typer.Argument(None, help="Optional sub-breed, e.g. 'afghan'."),
    count: int | None = typer.Option(None, "--count", "-n", min=1, max=50, help="Number of images."),
) -> None:
    """Show random sample image URLs for a breed or sub-breed."""

    settings = AppSettings()
    try:
        screen = BreedDetailScreen(breed, subbreed, image_count=count or settings.image_count)
    except ValueError as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc

    asyncio.run(_load_images(settings, screen))
    if screen.error is not None:
        _console.print(build_error_panel(screen.error))
        raise typer.Exit(code=1)

    _console.print(build_images_table(screen.title, screen.images))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
