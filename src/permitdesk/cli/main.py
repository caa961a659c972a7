"""Entry point de la línea de comandos (Typer).

Por qué el auth gate en cada comando:
- Cada comando pasa primero por el gate, igual que una carga de página en el
  frontend de administración: los comandos protegidos exigen un token guardado
  y `login` es un comando solo-público.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable, Optional, TypeVar

import httpx
import typer
from pydantic import BaseModel
from rich.console import Console

from permitdesk.adapters.api import RESOURCE_NAMES, PermitDeskApi
from permitdesk.adapters.credential_store import FileCredentialStore
from permitdesk.cli import doctor
from permitdesk.cli.ui_components import build_entity_table, build_record_panel, build_session_panel
from permitdesk.core.config import AppSettings
from permitdesk.core.domain.requests import LoginRequest
from permitdesk.core.errors import PermitDeskError
from permitdesk.core.logging_config import setup_logging
from permitdesk.core.services.auth_gate import AuthGate, GateState

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Admin client for the permit/task management API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


class ConsoleNavigator:
    """Navigator para la CLI: una redirección se convierte en un aviso por stderr."""

    def __init__(self, console: Console) -> None:
        self._console = console
        self.target: str | None = None

    def replace(self, target: str) -> None:
        self.target = target
        if target.startswith("/signin"):
            self._console.print("[yellow]Not signed in.[/yellow] Run `permitdesk login` first.")
        else:
            self._console.print("[yellow]Already signed in.[/yellow] Use `permitdesk logout` or `login --force`.")


def _settings() -> AppSettings:
    settings = AppSettings()
    setup_logging(settings.log_level)
    return settings


def _gate(settings: AppSettings, *, require_auth: bool, path: str) -> None:
    store = FileCredentialStore(settings.resolved_credentials_path())
    gate = AuthGate(
        store,
        ConsoleNavigator(_err_console),
        signin_path=settings.signin_path,
        home_path=settings.home_path,
    )
    if gate.evaluate(require_auth, path).state is GateState.REDIRECTING:
        raise typer.Exit(code=1)


def _run(settings: AppSettings, action: Callable[[PermitDeskApi], Awaitable[T]]) -> T:
    async def runner() -> T:
        async with PermitDeskApi.from_settings(settings) as api:
            return await action(api)

    try:
        return asyncio.run(runner())
    except PermitDeskError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    except httpx.HTTPError as exc:
        _err_console.print(f"[red]Network error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _resource_name(resource: str) -> str:
    name = resource.strip().lower().replace("-", "_")
    if name not in RESOURCE_NAMES:
        raise typer.BadParameter(f"unknown resource '{resource}' (choose from: {', '.join(RESOURCE_NAMES)})")
    return name


def parse_filters(pairs: list[str] | None) -> dict[str, str]:
    """Pares `key=value` -> mapping ordenado de filtros."""

    filters: dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise typer.BadParameter(f"filter must look like key=value, got '{pair}'")
        key, value = pair.split("=", 1)
        filters[key.strip()] = value.strip()
    return filters


def list_params(pairs: list[str] | None, *, page: int | None = None, limit: int | None = None) -> dict[str, str | int] | None:
    """Filtros `key=value` + paginación; `--page`/`--limit` solo pisan al filtro si se pasan.

    Devuelve None sin ningún parámetro, para que cada servicio aplique su paginación por defecto.
    """

    params: dict[str, str | int] = dict(parse_filters(pairs))
    if page is not None:
        params["page"] = page
    if limit is not None:
        params["limit"] = limit
    return params or None


def _print_json(value: Any) -> None:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif isinstance(value, list):
        value = [v.model_dump(mode="json") if isinstance(v, BaseModel) else v for v in value]
    _console.print_json(json.dumps(value, ensure_ascii=False))


@app.command()
def login(
    username: str = typer.Option(..., "--username", "-u", prompt=True),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
    domain_id: Optional[int] = typer.Option(None, "--domain-id", help="Sign in straight into this domain."),
    force: bool = typer.Option(False, "--force", help="Sign in again even if a session exists."),
) -> None:
    """Sign in and store the session locally."""

    settings = _settings()
    if not force:
        _gate(settings, require_auth=False, path=settings.signin_path)

    request = LoginRequest(username=username, password=password, domain_id=domain_id)
    result = _run(settings, lambda api: api.auth.login(request))
    _console.print(f"[green]Signed in as[/green] {result.user.username}")


@app.command()
def logout() -> None:
    """Forget the stored session."""

    settings = _settings()
    FileCredentialStore(settings.resolved_credentials_path()).clear()
    _console.print("[green]Signed out.[/green]")


@app.command()
def whoami(refresh: bool = typer.Option(False, "--refresh", help="Fetch the profile from the server.")) -> None:
    """Show the stored session (optionally refreshed from /auth/profile)."""

    settings = _settings()
    _gate(settings, require_auth=True, path="/profile")
    store = FileCredentialStore(settings.resolved_credentials_path())
    if refresh:
        profile = _run(settings, lambda api: api.auth.get_profile())
        _console.print(build_record_panel(profile, title="Profile"))
    _console.print(build_session_panel(store.load()))


@app.command("list")
def list_resource(
    resource: str = typer.Argument(..., help="Resource name, e.g. permits or permit-types."),
    page: Optional[int] = typer.Option(None, "--page", min=1),
    limit: Optional[int] = typer.Option(None, "--limit", min=1),
    filters: Optional[list[str]] = typer.Option(None, "--filter", "-f", help="Extra filter as key=value."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw envelope as JSON."),
) -> None:
    """List a resource page."""

    name = _resource_name(resource)
    settings = _settings()
    _gate(settings, require_auth=True, path=f"/{name.replace('_', '-')}")

    params = list_params(filters, page=page, limit=limit)
    envelope = _run(settings, lambda api: api.resource(name).get_all(params))
    if as_json:
        _print_json(envelope)
        return
    _console.print(build_entity_table(name, envelope.data or [], envelope.meta))


@app.command()
def show(
    resource: str = typer.Argument(...),
    item_id: int = typer.Argument(..., metavar="ID"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Show one record."""

    name = _resource_name(resource)
    settings = _settings()
    _gate(settings, require_auth=True, path=f"/{name.replace('_', '-')}/{item_id}")

    entity = _run(settings, lambda api: api.resource(name).get_by_id(item_id))
    if as_json:
        _print_json(entity)
        return
    _console.print(build_record_panel(entity))


@app.command()
def delete(
    resource: str = typer.Argument(...),
    item_id: int = typer.Argument(..., metavar="ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Delete one record."""

    name = _resource_name(resource)
    settings = _settings()
    _gate(settings, require_auth=True, path=f"/{name.replace('_', '-')}/{item_id}")

    if not yes:
        typer.confirm(f"Delete {name} #{item_id}?", abort=True)
    _run(settings, lambda api: api.resource(name).delete(item_id))
    _console.print(f"[green]Deleted[/green] {name} #{item_id}")


@app.command()
def notifications(
    unread: bool = typer.Option(False, "--unread", help="Only unread notifications."),
    mark_read: bool = typer.Option(False, "--mark-read", help="Mark everything as read afterwards."),
) -> None:
    """Show permit expiry notifications."""

    settings = _settings()
    _gate(settings, require_auth=True, path="/notifications")

    async def fetch(api: PermitDeskApi) -> tuple[list[Any], int]:
        if unread:
            items = await api.notifications.get_unread()
        else:
            items = (await api.notifications.get_all()).data or []
        count = await api.notifications.get_unread_count()
        if mark_read:
            await api.notifications.mark_all_as_read()
        return items, count

    items, count = _run(settings, fetch)
    _console.print(build_entity_table("notifications", items))
    _console.print(f"[dim]{count} unread[/dim]")


def run() -> None:
    app()
