"""Breed catalog presentation helpers.

Pure functions over immutable snapshots: sectioning the sorted breed list by
initial letter and the hierarchical substring search. Every call rebuilds its
output from the full input, nothing is patched in place.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.domain.models import AlphabeticSection, Breed


def split_into_sections(breeds: Sequence[Breed]) -> list[AlphabeticSection]:
    """Group an already sorted breed list into runs sharing the first letter.

    One section per maximal run of consecutive breeds, in encounter order.
    An empty list yields no sections.
    """

    sections: list[AlphabeticSection] = []
    run: list[Breed] = []
    current_letter: str | None = None

    for breed in breeds:
        letter = breed.name[:1]
        if current_letter is not None and letter != current_letter:
            sections.append(AlphabeticSection(letter=current_letter, breeds=tuple(run)))
            run = []
        current_letter = letter
        run.append(breed)

    if current_letter is not None:
        sections.append(AlphabeticSection(letter=current_letter, breeds=tuple(run)))
    return sections


def normalize_search_term(text: str | None) -> str:
    return (text or "").strip().lower()


def matches(breed: Breed, term: str) -> Breed | None:
    """Return the part of `breed` that matches `term`, or None.

    `term` must already be lower-cased and non-empty. A matching name keeps the
    node untouched (children included); otherwise the node survives only when
    some sub-breed matches, rebuilt with just those sub-breeds.
    """

    if term in breed.name.lower():
        return breed

    if breed.sub_breeds:
        matching = []
        for sub_breed in breed.sub_breeds:
            match = matches(sub_breed, term)
            if match is not None:
                matching.append(match)
        if matching:
            return Breed(name=breed.name, parent_name=breed.parent_name, sub_breeds=tuple(matching))

    return None


def filter_sections(sections: Iterable[AlphabeticSection], text: str | None) -> list[AlphabeticSection]:
    """Apply the search box text to the full, unfiltered sections.

    Blank text means no filtering. Sections left without breeds are dropped;
    section and breed order are preserved.
    """

    term = normalize_search_term(text)
    if not term:
        return list(sections)

    filtered: list[AlphabeticSection] = []
    for section in sections:
        breeds = []
        for breed in section.breeds:
            match = matches(breed, term)
            if match is not None:
                breeds.append(match)
        if breeds:
            filtered.append(AlphabeticSection(letter=section.letter, breeds=tuple(breeds)))
    return filtered
