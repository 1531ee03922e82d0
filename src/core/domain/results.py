"""Resultado tri-estado de una request.

Por qué no excepciones:
- El consumidor (UI) recibe el resultado en un callback; un valor explícito
  obliga a tratar los tres casos y nunca mezcla datos con error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

R = TypeVar("R")


@dataclass(frozen=True)
class Empty:
    """El servicio respondió 2xx con un cuerpo vacío (legítimo en algunos endpoints)."""


@dataclass(frozen=True)
class Success(Generic[R]):
    value: R


@dataclass(frozen=True)
class Failure:
    error: Exception


APIResult = Union[Empty, Success[R], Failure]
