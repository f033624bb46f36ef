"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no hace I/O ni conoce la CLI: solo conceptos del problema.
"""
