"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (familia de SO, resultados).
- El dominio no conoce subprocess, SSH ni CLI: solo conceptos del problema.
"""
