"""Modelos y entidades del dominio.

Por qué:
- Aquí viven estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no sabe nada de HTTP, archivos ni CLI: solo de los conceptos del
  backend de permisos.
"""
