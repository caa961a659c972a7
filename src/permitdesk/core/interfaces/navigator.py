"""Contrato de navegación que usa el auth gate."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Navigator(Protocol):
    """Reemplaza la ubicación actual (no agrega entrada al historial)."""

    def replace(self, target: str) -> None: ...
