"""Interfaces del Core.

Por qué:
- Define contratos (Protocol) que implementan los adaptadores concretos.
- Invierte dependencias: el Core depende de abstracciones, no de archivos ni
  de routers.
"""
