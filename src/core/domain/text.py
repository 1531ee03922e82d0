"""Utilidades de texto para nombres visibles."""

from __future__ import annotations


def sentence_cased(value: str) -> str:
    """Primera letra en mayúscula y el resto en minúscula (`"HOUND"` -> `"Hound"`).

    Es a la vez la forma de presentación y la clave de ordenación de las razas.
    """

    return value[:1].upper() + value[1:].lower()
