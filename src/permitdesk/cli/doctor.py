"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from permitdesk.adapters.credential_store import FileCredentialStore
from permitdesk.adapters.http_client import build_async_client
from permitdesk.core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(settings.api_url.rstrip("/") + "/auth/profile")
        # Cualquier respuesta HTTP (incluso 401) prueba que el backend responde.
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    store = FileCredentialStore(settings.resolved_credentials_path())

    table = Table(title="permitdesk doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API base URL", "OK", settings.api_url)
    table.add_row("User .env", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))
    table.add_row("Credentials file", "OK", str(store.path))

    # Session
    record = store.load()
    if record is None:
        table.add_row("Session", "NONE", "Run `permitdesk login`")
    else:
        who = record.user.username if record.user else "unknown user"
        table.add_row("Session", "OK", f"token stored for {who}")

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] set the backend with `permitdesk doctor set-url <url>` "
            "or the PERMITDESK_API_URL environment variable."
        )


@app.command(name="set-url")
def set_url(url: str = typer.Argument(..., help="Backend base URL, e.g. https://permits.example.com/api")) -> None:
    """Persist the backend base URL in the user config .env."""

    url = url.strip()
    if not url.startswith(("http://", "https://")):
        raise typer.BadParameter("url must start with http:// or https://")

    env_path = write_user_env_vars({"PERMITDESK_API_URL": url})
    _console.print(f"[green]Saved API URL to:[/green] {env_path}")
