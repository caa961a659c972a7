"""Contrato del store de credenciales.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el cliente HTTP y el auth gate reciban el store como objeto de
  sesión inyectado; en tests se cambia el store en archivo por uno en memoria.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from permitdesk.core.domain.credentials import CredentialRecord
from permitdesk.core.domain.models import Domain, User


@runtime_checkable
class CredentialStore(Protocol):
    """Contenedor del token, el usuario cacheado y el dominio seleccionado.

    Reglas de diseño:
    - Los tres campos solo cambian juntos: `commit` los escribe todos y
      `clear` los borra todos. No hay setter parcial.
    - Un token no vacío es la única señal de "autenticado".
    """

    def load(self) -> CredentialRecord | None:
        """Devuelve el registro guardado, o None si nadie inició sesión."""

        ...

    def commit(self, record: CredentialRecord) -> None:
        """Reemplaza el registro guardado de forma atómica."""

        ...

    def clear(self) -> None:
        """Borra token, usuario y dominio de forma atómica."""

        ...

    @property
    def token(self) -> str | None: ...

    @property
    def user(self) -> User | None: ...

    @property
    def domain(self) -> Domain | None: ...

    @property
    def is_authenticated(self) -> bool: ...
