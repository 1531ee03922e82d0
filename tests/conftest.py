"""Shared fixtures: canned dog.ceo payloads and injectable transports."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from adapters.http_client import WebEnvironment

BREEDS_PAYLOAD = {
    "message": {
        "hound": ["basset", "afghan"],
        "akita": [],
        "bulldog": ["french", "boston", "english"],
        "beagle": [],
        "corgi": ["cardigan"],
    },
    "status": "success",
}

IMAGES_PAYLOAD = {
    "message": [
        "https://images.dog.ceo/breeds/hound-afghan/n02088094_1003.jpg",
        "not a url",
        "https://images.dog.ceo/breeds/hound-afghan/n02088094_1007.jpg",
    ],
    "status": "success",
}


class RecordingDispatcher:
    """UI dispatcher that stores callbacks until the test runs them."""

    def __init__(self) -> None:
        self.callbacks: list[Callable[[], None]] = []

    def dispatch(self, callback: Callable[[], None]) -> None:
        self.callbacks.append(callback)

    def drain(self) -> None:
        callbacks, self.callbacks = self.callbacks, []
        for callback in callbacks:
            callback()


def dog_ceo_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("/breeds/list/all"):
        return httpx.Response(200, json=BREEDS_PAYLOAD)
    if "/images/random/" in request.url.path:
        return httpx.Response(200, json=IMAGES_PAYLOAD)
    return httpx.Response(404, json={"status": "error", "message": "Breed not found"})


@pytest.fixture
def make_environment() -> Callable[..., WebEnvironment]:
    """Build a `WebEnvironment` whose transport is an `httpx.MockTransport`."""

    def factory(
        handler: Callable[[httpx.Request], httpx.Response] = dog_ceo_handler,
        **kwargs: object,
    ) -> WebEnvironment:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return WebEnvironment(transport=client, **kwargs)  # type: ignore[arg-type]

    return factory


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()
