"""Modelos y entidades del dominio.

Por qué:
- Aquí viven requests, respuestas y schemas de salida (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni SDKs: solo conceptos de marketing.
"""
