"""permitdesk: cliente async para la API REST de gestión de permisos y tareas."""

__version__ = "0.1.0"
