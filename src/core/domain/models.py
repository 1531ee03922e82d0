"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta del JSON del catálogo en el borde, sin código de parseo
  manual.
- Los modelos son inmutables (`frozen=True`): cada fetch o filtro produce un
  snapshot nuevo y los anteriores se descartan enteros.

Nota:
- El API de dog.ceo envuelve todo en `{"message": ..., "status": ...}`. Solo
  `from_wire` / `from_wire_json` traducen ese formato de cable; el constructor
  normal recibe los campos ya tipados.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, ValidationError, model_validator
from pydantic.config import ConfigDict

from core.domain.text import sentence_cased


class Breed(BaseModel):
    """Nodo del árbol de razas (dos niveles).

    - Raza sin sub-razas: hoja con `parent_name=None`.
    - Raza con sub-razas: nodo de agrupación, solo navegable (no tiene imágenes
      propias).
    - Sub-raza: hoja con `parent_name` y `sub_breeds=None`.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre visible (sentence case).",
    )
    parent_name: str | None = Field(
        default=None,
        description="Raza padre si el nodo es una sub-raza.",
    )
    sub_breeds: tuple[Breed, ...] | None = Field(
        default=None,
        description="Sub-razas ordenadas; None en hojas.",
    )

    @model_validator(mode="after")
    def _check_hierarchy(self) -> Breed:
        if self.parent_name is not None and self.sub_breeds is not None:
            raise ValueError("a sub-breed cannot have sub-breeds of its own")
        return self

    @property
    def id(self) -> str:
        if self.parent_name is not None:
            return f"{self.parent_name.lower()}/{self.name.lower()}"
        return self.name.lower()

    @property
    def is_group(self) -> bool:
        return bool(self.sub_breeds)

    def detail_target(self) -> tuple[str, str | None]:
        """Par `(breed, subbreed)` con el que se abre la pantalla de imágenes."""

        if self.parent_name is not None:
            return self.parent_name, self.name
        return self.name, None


Breed.model_rebuild()


class AlphabeticSection(BaseModel):
    """Grupo de razas consecutivas que comparten la letra inicial."""

    model_config = ConfigDict(frozen=True)

    letter: str = Field(..., min_length=1, max_length=1)
    breeds: tuple[Breed, ...] = Field(default_factory=tuple)

    @property
    def id(self) -> str:
        return self.letter


class DogImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    url: HttpUrl


class _BreedListPayload(BaseModel):
    message: dict[str, list[str]]
    status: str


class _ImageListPayload(BaseModel):
    message: list[str]
    status: str | None = None


_HTTP_URL: TypeAdapter[HttpUrl] = TypeAdapter(HttpUrl)


def build_breed_tree(dictionary: dict[str, list[str]]) -> list[Breed]:
    """Convierte `{raza: [sub-raza, ...]}` en una lista jerárquica ordenada.

    Los nombres se pasan a sentence case antes de guardarlos y de ordenar, de
    modo que el orden es el de los nombres visibles.
    """

    breeds: list[Breed] = []
    for key, sub_names in dictionary.items():
        name = sentence_cased(key)
        if not sub_names:
            breeds.append(Breed(name=name))
            continue

        sub_breeds = sorted(
            (Breed(name=sentence_cased(sub), parent_name=name) for sub in sub_names),
            key=lambda b: b.name,
        )
        breeds.append(Breed(name=name, sub_breeds=tuple(sub_breeds)))

    return sorted(breeds, key=lambda b: b.name)


def parse_image_url(raw: str) -> DogImage | None:
    """Crea un `DogImage` o devuelve None si la URL no es válida."""

    try:
        url = _HTTP_URL.validate_python(raw)
    except ValidationError:
        return None
    return DogImage(url=url)


class DogBreedList(BaseModel):
    """Respuesta de `breeds/list/all` ya transformada en árbol."""

    model_config = ConfigDict(frozen=True)

    breeds: tuple[Breed, ...] = Field(..., description="Razas de primer nivel, ordenadas.")
    status: str = Field(..., description="Status devuelto por el API (p.ej. 'success').")

    @classmethod
    def from_wire(cls, data: Any) -> DogBreedList:
        """Construye el catálogo desde `{"message": {...}, "status": ...}`.

        Cualquier otra forma (incluidos los propios nombres de campo del
        modelo) se rechaza con `ValidationError`.
        """

        return cls._from_payload(_BreedListPayload.model_validate(data))

    @classmethod
    def from_wire_json(cls, body: bytes | str) -> DogBreedList:
        return cls._from_payload(_BreedListPayload.model_validate_json(body))

    @classmethod
    def _from_payload(cls, payload: _BreedListPayload) -> DogBreedList:
        return cls(breeds=tuple(build_breed_tree(payload.message)), status=payload.status)


class DogImageList(BaseModel):
    """Respuesta de `breed/.../images/random/N`.

    Política de éxito parcial: las URLs mal formadas se descartan sin error.
    """

    model_config = ConfigDict(frozen=True)

    images: tuple[DogImage, ...] = Field(..., description="Imágenes con URL válida.")
    status: str | None = None

    @classmethod
    def from_wire(cls, data: Any) -> DogImageList:
        return cls._from_payload(_ImageListPayload.model_validate(data))

    @classmethod
    def from_wire_json(cls, body: bytes | str) -> DogImageList:
        return cls._from_payload(_ImageListPayload.model_validate_json(body))

    @classmethod
    def _from_payload(cls, payload: _ImageListPayload) -> DogImageList:
        images = [image for image in map(parse_image_url, payload.message) if image is not None]
        return cls(images=tuple(images), status=payload.status)
