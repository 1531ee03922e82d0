"""Screen state for browsing the catalog.

These holders own the snapshot fields a UI renders (sections, filtered
sections, images, current error) and are only updated from their own
completion handlers. Each screen keeps at most one request in flight: a reload
cancels the pending handle first, and completions from superseded requests are
ignored.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable

from adapters.dog_ceo import DEFAULT_IMAGE_COUNT, GetDogBreedsRequest, GetDogImagesRequest
from adapters.http_client import WebEnvironment
from core.domain.models import AlphabeticSection, DogImage
from core.domain.results import APIResult, Failure, Success
from core.domain.text import sentence_cased
from core.services.catalog import filter_sections, split_into_sections


@dataclass
class ScreenHooks:
    """Optional callbacks for UI layers (alerts, redraws)."""

    on_error: Callable[[Exception], None] | None = None
    on_change: Callable[[], None] | None = None


class _FetchingScreen:
    def __init__(self, hooks: ScreenHooks | None = None) -> None:
        self.error: Exception | None = None
        self._hooks = hooks or ScreenHooks()
        self._fetch_task: asyncio.Task[None] | None = None
        self._generation = 0
        self._settled = asyncio.Event()

    @property
    def is_loading(self) -> bool:
        return self._fetch_task is not None and not self._settled.is_set()

    def cancel(self) -> None:
        """Cancel the pending request, if any, and release `wait()` callers."""

        self._drop_pending()
        self._generation += 1
        self._settled.set()

    def _drop_pending(self) -> None:
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()
        self._fetch_task = None

    async def wait(self) -> None:
        """Wait until the latest request has delivered its result."""

        await self._settled.wait()

    def _start(self, environment: WebEnvironment, request: Any) -> asyncio.Task[None]:
        generation = self._generation + 1

        def on_complete(result: APIResult[Any]) -> None:
            if generation != self._generation:
                return
            try:
                self._apply(result)
                if isinstance(result, Failure):
                    self.error = result.error
                    if self._hooks.on_error is not None:
                        self._hooks.on_error(result.error)
                else:
                    self.error = None
            finally:
                self._settled.set()
            self._changed()

        # A configuration error raises here, before any state is touched.
        task = request.execute(environment, on_complete)
        self._drop_pending()
        self._generation = generation
        self._settled.clear()
        self._fetch_task = task
        return task

    def _apply(self, result: APIResult[Any]) -> None:
        raise NotImplementedError

    def _changed(self) -> None:
        if self._hooks.on_change is not None:
            self._hooks.on_change()


class BreedListScreen(_FetchingScreen):
    """Sectioned breed list with a search box."""

    def __init__(self, hooks: ScreenHooks | None = None) -> None:
        super().__init__(hooks)
        self.search_text = ""
        self.sections: list[AlphabeticSection] = []
        self.filtered_sections: list[AlphabeticSection] = []

    def reload(self, environment: WebEnvironment) -> asyncio.Task[None]:
        return self._start(environment, GetDogBreedsRequest())

    def set_search_text(self, text: str) -> None:
        self.search_text = text
        self.filter_content()
        self._changed()

    def filter_content(self) -> None:
        self.filtered_sections = filter_sections(self.sections, self.search_text)

    def _apply(self, result: APIResult[Any]) -> None:
        if isinstance(result, Success):
            self.sections = split_into_sections(result.value.breeds)
        else:
            self.sections = []
        self.filter_content()


class BreedDetailScreen(_FetchingScreen):
    """Random sample images for a breed or sub-breed."""

    def __init__(
        self,
        breed: str,
        subbreed: str | None = None,
        *,
        image_count: int = DEFAULT_IMAGE_COUNT,
        hooks: ScreenHooks | None = None,
    ) -> None:
        super().__init__(hooks)
        self.breed = breed
        self.subbreed = subbreed
        self.image_count = image_count
        self.images: list[DogImage] = []
        # Raises ValueError for a blank breed or a non-positive count.
        self._request = GetDogImagesRequest(breed=breed, subbreed=subbreed, count=image_count)

    @property
    def title(self) -> str:
        if self.subbreed:
            return f"{sentence_cased(self.breed)} ({sentence_cased(self.subbreed)})"
        return sentence_cased(self.breed)

    def reload(self, environment: WebEnvironment) -> asyncio.Task[None]:
        return self._start(environment, self._request)

    def _apply(self, result: APIResult[Any]) -> None:
        if isinstance(result, Success):
            self.images = list(result.value.images)
        else:
            self.images = []
