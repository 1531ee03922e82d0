"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y el cliente compartido (pool de conexiones).
- Facilita testeo: el `WebEnvironment` recibe el transporte por inyección, así
  que se puede sustituir por un stub/mocked client.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Callable, Mapping

import httpx

from core.config import DEFAULT_BASE_URL, AppSettings
from core.interfaces.transport import HTTPTransport, UIDispatcher


def build_async_client(settings: AppSettings | None = None) -> httpx.AsyncClient:
    """Crea el `httpx.AsyncClient` compartido del proceso.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las requests se comporten igual.
    - El pool de conexiones es del cliente; el contrato de requests nunca lo gestiona.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


class LoopDispatcher:
    """Entrega callbacks en un event loop concreto (thread-safe)."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def dispatch(self, callback: Callable[[], None]) -> None:
        self._loop.call_soon_threadsafe(callback)


@dataclass(frozen=True)
class WebEnvironment:
    """Valores compartidos por todas las requests del proceso.

    - `transport`: normalmente el `httpx.AsyncClient` de `build_async_client`.
    - `ui_dispatcher`: None significa "el event loop que llamó a `execute`".
    """

    transport: HTTPTransport
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    default_headers: Mapping[str, str] = field(default_factory=dict)
    ui_dispatcher: UIDispatcher | None = None


def build_web_environment(
    settings: AppSettings | None = None,
    *,
    transport: HTTPTransport,
    ui_dispatcher: UIDispatcher | None = None,
) -> WebEnvironment:
    settings = settings or AppSettings()
    return WebEnvironment(
        transport=transport,
        base_url=settings.base_url,
        timeout=settings.http_timeout_seconds,
        default_headers={"User-Agent": settings.user_agent},
        ui_dispatcher=ui_dispatcher,
    )
