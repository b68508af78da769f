"""Modelos y entidades del dominio.

- Estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni tarfile: solo conceptos del problema.
"""
