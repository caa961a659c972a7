"""Adaptadores: I/O contra el backend (HTTP) y el archivo local de credenciales."""
