"""Interfaces/abstracciones del Core.

Por qué:
- Define el contrato (Protocol) del proveedor generativo que implementan los
  adaptadores concretos y los fakes de tests.
- El Core depende de esta abstracción, nunca del SDK.
"""
