"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.dog_ceo import GetDogBreedsRequest
from adapters.http_client import build_async_client, build_web_environment
from core.config import AppSettings
from core.domain.errors import RequestConfigurationError
from core.domain.results import Empty, Success

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_catalog(settings: AppSettings) -> tuple[bool, str]:
    async with build_async_client(settings) as client:
        environment = build_web_environment(settings, transport=client)
        try:
            result = await GetDogBreedsRequest().fetch(environment)
        except RequestConfigurationError as exc:
            return False, str(exc)

    if isinstance(result, Success):
        return True, f"{len(result.value.breeds)} breeds ({result.value.status})"
    if isinstance(result, Empty):
        return False, "empty response"
    return False, str(result.error)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="dog-breeds Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Images per breed", "OK", str(settings.image_count))

    # Connectivity (best-effort)
    ok_api, detail_api = asyncio.run(_check_catalog(settings))
    table.add_row("Breed catalog", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] Check network access or override the API with `DOG_BREEDS_BASE_URL`."
        )
        raise typer.Exit(code=1)
