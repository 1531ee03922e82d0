"""Requests concretas del API de dog.ceo.

Endpoints:
- `breeds/list/all` -> `DogBreedList`
- `breed/<breed>[/<subbreed>]/images/random/<n>` -> `DogImageList`

Los segmentos de path siempre se envían en minúsculas. Los cuerpos se decodifican
solo desde el sobre `{"message", "status"}` del API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from adapters.api_request import APIRequest
from core.domain.models import DogBreedList, DogImageList

DEFAULT_IMAGE_COUNT = 10


@dataclass(frozen=True)
class GetDogBreedsRequest(APIRequest[DogBreedList]):
    response_type: ClassVar[type[DogBreedList]] = DogBreedList
    return_on_main_thread: ClassVar[bool] = True

    @property
    def path(self) -> str:
        return "breeds/list/all"

    def decode(self, body: bytes) -> DogBreedList:
        return DogBreedList.from_wire_json(body)


@dataclass(frozen=True)
class GetDogImagesRequest(APIRequest[DogImageList]):
    """Imágenes aleatorias de una raza o, si se indica, de una sub-raza."""

    breed: str
    subbreed: str | None = None
    count: int = DEFAULT_IMAGE_COUNT

    response_type: ClassVar[type[DogImageList]] = DogImageList
    return_on_main_thread: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if not self.breed.strip():
            raise ValueError("breed must not be empty")
        if self.count < 1:
            raise ValueError(f"count must be positive, got {self.count}")

    @property
    def path(self) -> str:
        if self.subbreed:
            return f"breed/{self.breed.lower()}/{self.subbreed.lower()}/images/random/{self.count}"
        return f"breed/{self.breed.lower()}/images/random/{self.count}"

    def decode(self, body: bytes) -> DogImageList:
        return DogImageList.from_wire_json(body)
