"""Errores del contrato HTTP.

Por qué una jerarquía propia:
- Los fallos del *sobre* HTTP (status, respuesta ausente, cuerpo ausente) son
  conceptos del dominio del cliente, distintos de los errores de red (httpx) o
  de decodificación (pydantic), que viajan tal cual dentro de `Failure`.
- Igualdad por valor: `HttpError(404) == HttpError(404)` facilita tests y UI.
"""

from __future__ import annotations


class RequestConfigurationError(RuntimeError):
    """La URL de una request no se puede construir.

    Es un error de programación (base URL o path mal configurados), no una
    condición de runtime: se lanza de inmediato y nunca pasa por `Failure`.
    """


class WebRequestError(Exception):
    """Base de los errores detectados al validar una respuesta HTTP."""

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.args == other.args  # type: ignore[union-attr]

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class HttpError(WebRequestError):
    """Status code fuera del rango 2xx."""

    def __init__(self, status_code: int) -> None:
        super().__init__(status_code)
        self.status_code = status_code

    def __str__(self) -> str:
        return f"HTTP error code {self.status_code}"


class NilResponse(WebRequestError):
    """El transporte no entregó una respuesta HTTP utilizable."""

    def __str__(self) -> str:
        return "no HTTP response code"


class NoDataReturned(WebRequestError):
    """Respuesta válida pero sin cuerpo."""

    def __str__(self) -> str:
        return "no data"
