"""Configuración de logging de permitdesk.

Por qué Rich en stderr:
- El root logger de la librería estándar escribe por stderr con un handler de
  Rich; las líneas de log nunca se mezclan con las tablas de la CLI en stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(log_level: str = "WARNING") -> None:
    """Configura el root logger de la aplicación (idempotente)."""

    level = getattr(logging, log_level.upper(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
            log_time_format="%Y-%m-%d %H:%M:%S",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(handler)
    else:
        for h in root.handlers:
            h.setLevel(level)

    # httpx loguea cada request en INFO; queda por detrás de nuestras líneas DEBUG.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
