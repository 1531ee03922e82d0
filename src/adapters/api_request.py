"""Contrato genérico de request tipada.

Responsabilidad:
- Construir URL/método/headers/body a partir de campos declarativos.
- Ejecutar la request sobre un `HTTPTransport` inyectado.
- Validar el sobre HTTP, decodificar el cuerpo al `response_type` y devolver
  un `APIResult` tri-estado (Empty / Success / Failure).

Uso:
- Declarar un `@dataclass(frozen=True)` que implemente `APIRequest`, con
  `path` y `response_type`; el resto tiene valores por defecto.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, ClassVar, Mapping, Protocol, TypeVar
from urllib.parse import urlencode

import httpx

from adapters.http_client import LoopDispatcher, WebEnvironment
from core.domain.errors import (
    HttpError,
    NilResponse,
    NoDataReturned,
    RequestConfigurationError,
)
from core.domain.http_method import HTTPMethod
from core.domain.results import APIResult, Empty, Failure, Success
from core.interfaces.transport import HTTPTransport

logger = logging.getLogger(__name__)

R_co = TypeVar("R_co", covariant=True)

REST_MARKER_HEADER = ("isREST", "true")


class APIRequest(Protocol[R_co]):
    """Request web tipada.

    Valores por defecto:
    - `method`: GET.
    - `headers`, `parameters`, `body`: ninguno.
    - `timeout`: None, es decir el del `WebEnvironment`.
    - `return_on_main_thread`: False; si es True el callback de `execute`
      siempre se entrega a través del dispatcher de UI.
    """

    response_type: ClassVar[type[Any]]
    method: ClassVar[HTTPMethod] = HTTPMethod.GET
    return_on_main_thread: ClassVar[bool] = False

    @property
    def path(self) -> str:
        """Se concatena a la base URL."""

        ...

    @property
    def parameters(self) -> Mapping[str, str] | None:
        return None

    @property
    def headers(self) -> Mapping[str, str] | None:
        return None

    @property
    def body(self) -> bytes | None:
        return None

    @property
    def timeout(self) -> float | None:
        return None

    def build_url(self, environment: WebEnvironment) -> str:
        """Base URL + path + `?k=v&...` si hay parámetros.

        Lanza `RequestConfigurationError` si el resultado no es una URL absoluta.
        """

        url = f"{environment.base_url.rstrip('/')}/{self.path.lstrip('/')}"
        if self.parameters:
            url = f"{url}?{urlencode(dict(self.parameters))}"

        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise RequestConfigurationError(f"Invalid request URL: {url!r}") from exc
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise RequestConfigurationError(f"Invalid request URL: {url!r}")
        return url

    def build_request(self, environment: WebEnvironment) -> httpx.Request:
        name, value = REST_MARKER_HEADER
        headers = {name: value}
        headers.update(environment.default_headers)
        if self.headers:
            headers.update(self.headers)

        timeout = self.timeout if self.timeout is not None else environment.timeout
        return httpx.Request(
            self.method.value,
            self.build_url(environment),
            headers=headers,
            content=self.body,
            extensions={"timeout": httpx.Timeout(timeout).as_dict()},
        )

    def decode(self, body: bytes) -> R_co:
        return self.response_type.model_validate_json(body)

    async def fetch(self, environment: WebEnvironment) -> APIResult[R_co]:
        """Ejecuta la request y devuelve el resultado directamente."""

        request = self.build_request(environment)
        return await send_request(environment.transport, request, self.decode)

    def execute(
        self,
        environment: WebEnvironment,
        on_complete: Callable[[APIResult[R_co]], None],
    ) -> asyncio.Task[None]:
        """Lanza la request y devuelve el handle (cancelable) al momento.

        `on_complete` se invoca una sola vez, de forma asíncrona. Si el handle
        se cancela antes de terminar, no se invoca. Si `on_complete` lanza, la
        excepción se registra en el log (nadie espera el handle). Requiere un
        event loop en marcha.
        """

        request = self.build_request(environment)
        loop = asyncio.get_running_loop()
        dispatcher = environment.ui_dispatcher or LoopDispatcher(loop)
        deliver_on_ui = self.return_on_main_thread

        def deliver(result: APIResult[R_co]) -> None:
            try:
                on_complete(result)
            except Exception:
                logger.exception("Completion handler for %s failed", request.url)

        async def run() -> None:
            result = await send_request(environment.transport, request, self.decode)
            if deliver_on_ui:
                dispatcher.dispatch(lambda: deliver(result))
            else:
                deliver(result)

        return loop.create_task(run())


def validate_response(response: object) -> bytes:
    """Comprueba el sobre HTTP y devuelve el cuerpo.

    Orden: respuesta HTTP presente, status 2xx, cuerpo presente.
    """

    if not isinstance(response, httpx.Response) or response.status_code is None:
        raise NilResponse()
    if not 200 <= response.status_code < 300:
        raise HttpError(response.status_code)
    try:
        return response.content
    except httpx.ResponseNotRead:
        raise NoDataReturned() from None


async def send_request(
    transport: HTTPTransport,
    request: httpx.Request,
    decode: Callable[[bytes], Any],
) -> APIResult[Any]:
    logger.debug("Executing request %s", request.url)
    try:
        response = await transport.send(request)
    except Exception as exc:
        logger.warning("Error executing request %s: %s", request.url, exc)
        return Failure(exc)

    try:
        body = validate_response(response)
    except (HttpError, NilResponse, NoDataReturned) as exc:
        logger.info("Request %s rejected: %s", request.url, exc)
        return Failure(exc)

    if not body:
        return Empty()

    try:
        return Success(decode(body))
    except ValueError as exc:
        logger.info("Could not decode response of %s: %s", request.url, exc)
        return Failure(exc)
