"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan el transporte y la UI.
- Permite invertir dependencias: el Core depende de abstracciones.
"""
