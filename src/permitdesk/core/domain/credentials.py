"""Registro de credenciales que guarda el store."""

from __future__ import annotations

from pydantic import BaseModel, Field

from permitdesk.core.domain.models import Domain, User


class CredentialRecord(BaseModel):
    """Todo lo que una sesión iniciada guarda en el cliente.

    Nota: la presencia del token es la única señal de "autenticado"; no se
    controla expiración localmente y un token vencido solo se descubre cuando
    el servidor responde 401.
    """

    token: str = Field(
        ...,
        min_length=1,
        description="Bearer token opaco emitido en el login.",
    )
    user: User | None = Field(
        default=None,
        description="Snapshot del usuario al momento del login.",
    )
    domain: Domain | None = Field(
        default=None,
        description="Dominio seleccionado actualmente para la sesión.",
    )
