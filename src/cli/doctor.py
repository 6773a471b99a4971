"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import PROVIDER_KEYS, AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_REQUIRED_KEYS = ("API_KEY", "ABSTRACT_API_KEY")


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _mask(value: str) -> str:
    if len(value) <= 6:
        return "***"
    return f"{value[:3]}…{value[-3:]}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="authflow Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    for key, value in settings.provider_values().items():
        if value:
            table.add_row(key, "OK", _mask(value))
        elif key in _REQUIRED_KEYS:
            table.add_row(key, "MISSING", "Required")
        else:
            table.add_row(key, "OPTIONAL", "Not used by the REST client")

    if not settings.api_key:
        table.add_row("Session backend", "MEMORY", "No API_KEY -> in-memory accounts only")
    else:
        table.add_row("Session backend", "OK", settings.identity_toolkit_url)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.email_validation_url, settings))
    table.add_row("Validation service", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not settings.abstract_api_key:
        _console.print(
            "\n[yellow]Note:[/yellow] Without ABSTRACT_API_KEY every email is rejected as invalid."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores keys in the user config .env)."""

    values: dict[str, str] = {}
    for key in PROVIDER_KEYS:
        hidden = key.endswith("API_KEY")
        value = typer.prompt(key, default="", show_default=False, hide_input=hidden).strip()
        if value:
            values[key] = value

    if not values.get("ABSTRACT_API_KEY"):
        raise typer.BadParameter("ABSTRACT_API_KEY is required")

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
