"""Contratos del transporte HTTP y de la entrega de callbacks.

Por qué Protocol:
- `httpx.AsyncClient` cumple `HTTPTransport` sin adaptadores; en tests se
  sustituye por un cliente con `httpx.MockTransport` o un fake mínimo.
- `UIDispatcher` abstrae "ejecutar en el contexto dueño de la UI" (event loop,
  hilo principal de un toolkit...) sin acoplar el contrato a ninguno.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

import httpx


@runtime_checkable
class HTTPTransport(Protocol):
    """Envía una request ya construida.

    Los errores de red se propagan como excepciones; una respuesta ausente se
    representa con None.
    """

    async def send(self, request: httpx.Request) -> httpx.Response | None:
        ...


@runtime_checkable
class UIDispatcher(Protocol):
    """Programa un callback en el contexto de ejecución de la UI."""

    def dispatch(self, callback: Callable[[], None]) -> None:
        ...
