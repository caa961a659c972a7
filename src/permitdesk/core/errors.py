"""Jerarquía de excepciones de permitdesk.

Reglas:
  - Los fallos de red (``httpx.TransportError``) nunca se envuelven; llegan
    al llamador tal cual.
  - Toda respuesta no-2xx se convierte en ``ApiRequestError``, sea cual sea el status.
"""

from __future__ import annotations

from typing import Any


class PermitDeskError(Exception):
    """Excepción base de todos los errores de permitdesk."""


class ApiRequestError(PermitDeskError):
    """El backend respondió con un status no-2xx."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: str | None = None,
        details: Any = None,
        trace_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        self.trace_id = trace_id

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    def __repr__(self) -> str:
        return f"ApiRequestError(status_code={self.status_code}, message={self.message!r})"


class EnvelopeError(PermitDeskError):
    """El cuerpo de la respuesta no cumple el contrato de sobre declarado."""

    def __init__(self, message: str, *, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class CredentialStoreError(PermitDeskError):
    """No se pudo escribir el store de credenciales."""
