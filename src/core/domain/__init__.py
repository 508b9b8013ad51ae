"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2) y los enums.
- El dominio no conoce HTTP, CLI ni subprocesos: solo conceptos del release.
"""
