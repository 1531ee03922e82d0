from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import ClassVar, Mapping

import httpx
import pytest
from pydantic import ValidationError

from adapters.api_request import APIRequest, validate_response
from adapters.dog_ceo import GetDogBreedsRequest, GetDogImagesRequest
from adapters.http_client import WebEnvironment, build_async_client, build_web_environment
from core.config import AppSettings
from core.domain.errors import HttpError, NilResponse, NoDataReturned, RequestConfigurationError
from core.domain.http_method import HTTPMethod
from core.domain.models import DogBreedList, DogImageList
from core.domain.results import Empty, Failure, Success


@dataclass(frozen=True)
class SearchRequest(APIRequest[DogBreedList]):
    """Non-UI request with parameters, headers and a body."""

    term: str

    response_type: ClassVar[type[DogBreedList]] = DogBreedList
    method: ClassVar[HTTPMethod] = HTTPMethod.POST

    @property
    def path(self) -> str:
        return "/breeds/search"

    @property
    def parameters(self) -> Mapping[str, str] | None:
        return {"q": self.term, "limit": "3"}

    @property
    def headers(self) -> Mapping[str, str] | None:
        return {"X-Trace": "abc"}

    @property
    def body(self) -> bytes | None:
        return json.dumps({"term": self.term}).encode()

    @property
    def timeout(self) -> float | None:
        return 2.5

    def decode(self, body: bytes) -> DogBreedList:
        return DogBreedList.from_wire_json(body)


class FakeTransport:
    def __init__(self, response: object = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.requests: list[httpx.Request] = []

    async def send(self, request: httpx.Request) -> object:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


class StalledTransport:
    async def send(self, request: httpx.Request) -> httpx.Response:
        await asyncio.Event().wait()
        raise AssertionError("unreachable")


def _fetch(request, environment):
    return asyncio.run(request.fetch(environment))


def _respond_with(*args, **kwargs):
    return lambda request: httpx.Response(*args, **kwargs)


# URL and request construction


def test_breeds_url():
    environment = WebEnvironment(transport=FakeTransport())

    assert GetDogBreedsRequest().build_url(environment) == "https://dog.ceo/api/breeds/list/all"


@pytest.mark.parametrize(
    ("request_", "expected"),
    [
        (GetDogImagesRequest("Hound", count=3), "https://dog.ceo/api/breed/hound/images/random/3"),
        (
            GetDogImagesRequest("HOUND", "Afghan", count=10),
            "https://dog.ceo/api/breed/hound/afghan/images/random/10",
        ),
    ],
)
def test_images_url_lowercases_segments(request_, expected):
    assert request_.build_url(WebEnvironment(transport=FakeTransport())) == expected


def test_parameters_are_appended_as_query_string():
    environment = WebEnvironment(transport=FakeTransport(), base_url="https://example.org/api/")

    url = SearchRequest("hound").build_url(environment)

    assert url == "https://example.org/api/breeds/search?q=hound&limit=3"


@pytest.mark.parametrize("base_url", ["not a url", "", "ftp://dog.ceo/api"])
def test_invalid_base_url_fails_fast(base_url):
    environment = WebEnvironment(transport=FakeTransport(), base_url=base_url)

    with pytest.raises(RequestConfigurationError):
        GetDogBreedsRequest().build_url(environment)


def test_build_request_defaults():
    environment = WebEnvironment(transport=FakeTransport(), default_headers={"User-Agent": "tests"})

    request = GetDogBreedsRequest().build_request(environment)

    assert request.method == "GET"
    assert request.headers["isREST"] == "true"
    assert request.headers["User-Agent"] == "tests"
    assert request.content == b""
    assert request.extensions["timeout"] == httpx.Timeout(10.0).as_dict()


def test_build_request_uses_declared_fields():
    request = SearchRequest("hound").build_request(WebEnvironment(transport=FakeTransport()))

    assert request.method == "POST"
    assert request.headers["X-Trace"] == "abc"
    assert request.headers["isREST"] == "true"
    assert json.loads(request.content) == {"term": "hound"}
    assert request.extensions["timeout"] == httpx.Timeout(2.5).as_dict()


def test_environment_from_settings():
    settings = AppSettings(base_url="https://mirror.example/api", http_timeout_seconds=3)

    environment = build_web_environment(settings, transport=FakeTransport())

    assert environment.base_url == "https://mirror.example/api"
    assert environment.timeout == 3
    assert environment.default_headers["User-Agent"] == settings.user_agent


def test_shared_client_from_settings():
    settings = AppSettings(http_timeout_seconds=4, user_agent="dog-breeds-tests")

    async def scenario():
        async with build_async_client(settings) as client:
            return client.timeout, client.headers, client.follow_redirects

    timeout, headers, follow_redirects = asyncio.run(scenario())

    assert timeout == httpx.Timeout(4)
    assert headers["User-Agent"] == "dog-breeds-tests"
    assert headers["Accept"] == "application/json"
    assert follow_redirects


def test_images_request_validates_arguments():
    with pytest.raises(ValueError):
        GetDogImagesRequest("hound", count=0)
    with pytest.raises(ValueError):
        GetDogImagesRequest("  ")


# Response validation


def test_success(make_environment):
    result = _fetch(GetDogBreedsRequest(), make_environment())

    assert isinstance(result, Success)
    assert [b.name for b in result.value.breeds][:2] == ["Akita", "Beagle"]


def test_transport_error_is_passed_through():
    error = httpx.ConnectError("connection refused")

    result = _fetch(GetDogBreedsRequest(), WebEnvironment(transport=FakeTransport(error=error)))

    assert isinstance(result, Failure)
    assert result.error is error


def test_transport_error_from_client(make_environment):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    result = _fetch(GetDogBreedsRequest(), make_environment(handler))

    assert isinstance(result, Failure)
    assert isinstance(result.error, httpx.ConnectTimeout)


@pytest.mark.parametrize("response", [None, "HTTP/1.1 200 OK", object()])
def test_missing_http_response(response):
    result = _fetch(GetDogBreedsRequest(), WebEnvironment(transport=FakeTransport(response)))

    assert result == Failure(NilResponse())


@pytest.mark.parametrize("status", [301, 404, 500, 199])
def test_http_error_status(make_environment, status):
    result = _fetch(GetDogBreedsRequest(), make_environment(_respond_with(status, json={"status": "error"})))

    assert result == Failure(HttpError(status))
    assert str(result.error) == f"HTTP error code {status}"


def test_missing_body():
    response = httpx.Response(200, stream=httpx.ByteStream(b"{}"))

    result = _fetch(GetDogBreedsRequest(), WebEnvironment(transport=FakeTransport(response)))

    assert result == Failure(NoDataReturned())


def test_status_is_checked_before_body():
    response = httpx.Response(503, stream=httpx.ByteStream(b""))

    with pytest.raises(HttpError):
        validate_response(response)


def test_empty_body_is_empty_result(make_environment):
    result = _fetch(GetDogBreedsRequest(), make_environment(_respond_with(204)))

    assert result == Empty()


def test_decode_error(make_environment):
    result = _fetch(GetDogBreedsRequest(), make_environment(_respond_with(200, content=b"<html></html>")))

    assert isinstance(result, Failure)
    assert isinstance(result.error, ValidationError)


@pytest.mark.parametrize(
    "request_, body",
    [
        (GetDogBreedsRequest(), {"breeds": [{"name": "zeta"}, {"name": "alpha"}], "status": "success"}),
        (GetDogImagesRequest("akita", count=1), {"images": []}),
    ],
)
def test_model_field_names_are_not_a_wire_format(make_environment, request_, body):
    result = _fetch(request_, make_environment(_respond_with(200, json=body)))

    assert isinstance(result, Failure)
    assert isinstance(result.error, ValidationError)


def test_image_response_with_one_malformed_url(make_environment):
    payload = {
        "message": [
            "https://images.dog.ceo/breeds/akita/512px-Ainu-Dog.jpg",
            "http//broken",
            "https://images.dog.ceo/breeds/akita/Akita_hiking.jpg",
        ],
        "status": "success",
    }

    result = _fetch(GetDogImagesRequest("akita", count=3), make_environment(_respond_with(200, json=payload)))

    assert isinstance(result, Success)
    assert isinstance(result.value, DogImageList)
    assert len(result.value.images) == 2


def test_request_reaches_transport_unchanged():
    transport = FakeTransport(httpx.Response(204))

    _fetch(GetDogImagesRequest("hound", "afghan", count=2), WebEnvironment(transport=transport))

    (sent,) = transport.requests
    assert str(sent.url) == "https://dog.ceo/api/breed/hound/afghan/images/random/2"
    assert sent.headers["isREST"] == "true"


# Completion delivery


def test_execute_returns_before_completion(make_environment, dispatcher):
    results = []

    async def scenario():
        task = GetDogBreedsRequest().execute(make_environment(ui_dispatcher=dispatcher), results.append)
        assert not task.done()
        assert results == []
        await task

    asyncio.run(scenario())

    assert results == []
    assert len(dispatcher.callbacks) == 1
    dispatcher.drain()
    assert len(results) == 1
    assert isinstance(results[0], Success)


def test_execute_defaults_to_calling_loop(make_environment):
    results = []

    async def scenario():
        task = GetDogImagesRequest("hound", count=3).execute(make_environment(), results.append)
        await task
        await asyncio.sleep(0)

    asyncio.run(scenario())

    assert len(results) == 1
    assert isinstance(results[0], Success)


def test_non_ui_request_completes_inline(make_environment, dispatcher):
    results = []
    handler = _respond_with(200, json={"message": {"akita": []}, "status": "success"})

    async def scenario():
        await SearchRequest("akita").execute(make_environment(handler, ui_dispatcher=dispatcher), results.append)

    asyncio.run(scenario())

    assert dispatcher.callbacks == []
    assert len(results) == 1
    assert isinstance(results[0], Success)


def test_failures_are_delivered_through_callback(make_environment, dispatcher):
    results = []

    async def scenario():
        environment = make_environment(_respond_with(404), ui_dispatcher=dispatcher)
        await GetDogImagesRequest("unicorn").execute(environment, results.append)

    asyncio.run(scenario())
    dispatcher.drain()

    assert results == [Failure(HttpError(404))]


def test_cancelled_request_never_completes(dispatcher):
    results = []

    async def scenario():
        environment = WebEnvironment(transport=StalledTransport(), ui_dispatcher=dispatcher)
        task = GetDogBreedsRequest().execute(environment, results.append)
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())

    assert dispatcher.callbacks == []
    assert results == []


def test_execute_fails_fast_on_bad_configuration(dispatcher):
    async def scenario():
        environment = WebEnvironment(transport=FakeTransport(), base_url="dog.ceo", ui_dispatcher=dispatcher)
        with pytest.raises(RequestConfigurationError):
            GetDogBreedsRequest().execute(environment, lambda result: None)

    asyncio.run(scenario())
