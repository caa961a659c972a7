"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from permitdesk.core.domain.credentials import CredentialRecord
from permitdesk.core.domain.envelope import PageMeta

# Columnas que muestra `list` por recurso; el resto cae a id/name.
LIST_COLUMNS: dict[str, tuple[str, ...]] = {
    "domains": ("id", "code", "name", "is_active"),
    "divisions": ("id", "domain_id", "code", "name"),
    "permit_types": ("id", "code", "name", "division_id"),
    "permits": ("id", "permit_no", "name", "status", "expiry_date"),
    "projects": ("id", "code", "name", "domain_id", "status"),
    "tasks": ("id", "code", "title", "project_id", "status_id", "due_date"),
    "users": ("id", "username", "full_name", "email", "is_active"),
    "roles": ("id", "code", "name", "category"),
    "menus": ("id", "name", "path", "order_index"),
    "references": ("id", "reference_category_id", "name", "is_active"),
    "reference_categories": ("id", "module_id", "name", "is_active"),
    "notifications": ("id", "type", "title", "is_read", "created_at"),
}


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def build_entity_table(resource: str, rows: Sequence[BaseModel], meta: PageMeta | None = None) -> Table:
    columns = LIST_COLUMNS.get(resource, ("id", "name"))
    title = resource.replace("_", " ").title()
    if meta is not None:
        title += f" (page {meta.page}, {len(rows)} of {meta.total})"

    table = Table(title=title)
    for i, column in enumerate(columns):
        table.add_column(column, style="cyan" if i == 0 else "white", no_wrap=(i == 0))
    for row in rows:
        table.add_row(*(_cell(getattr(row, column, None)) for column in columns))
    return table


def build_record_panel(entity: BaseModel, *, title: str | None = None) -> Panel:
    """Panel clave/valor para una entidad; los previews anidados se resumen."""

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    for key, value in entity.model_dump(exclude_none=True).items():
        if isinstance(value, dict):
            value = value.get("name") or value.get("username") or value.get("id")
        elif isinstance(value, list):
            value = f"{len(value)} item(s)"
        table.add_row(key, _cell(value))
    return Panel(table, title=title or type(entity).__name__, border_style="magenta")


def build_session_panel(record: CredentialRecord | None) -> Panel:
    body = Text()
    if record is None:
        body.append("Not signed in.", style="yellow")
        return Panel(body, title="Session", border_style="yellow")

    user = record.user
    body.append("User: ", style="bold")
    body.append(f"{user.username} ({user.full_name or '-'})\n" if user else "-\n")
    if user and user.role:
        body.append("Role: ", style="bold")
        body.append(f"{user.role.name}\n")
    body.append("Domain: ", style="bold")
    body.append(f"{record.domain.code} - {record.domain.name}" if record.domain else "-")
    return Panel(body, title="Session", border_style="green")
