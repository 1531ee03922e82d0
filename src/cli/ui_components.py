"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar árboles/tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from core.domain.models import AlphabeticSection, Breed, DogImage


def _add_breed(node: Tree, breed: Breed) -> None:
    if breed.sub_breeds:
        branch = node.add(Text(breed.name, style="bold"))
        for sub_breed in breed.sub_breeds:
            _add_breed(branch, sub_breed)
    else:
        node.add(Text(breed.name, style="white"))


def build_sections_tree(sections: Sequence[AlphabeticSection], *, title: str = "Dog Breeds") -> Tree:
    """Árbol Rich: una rama por letra, razas y sub-razas anidadas."""

    tree = Tree(Text(title, style="bold cyan"))
    for section in sections:
        letter = tree.add(Text(section.letter, style="bold yellow"))
        for breed in section.breeds:
            _add_breed(letter, breed)
    return tree


def build_images_table(title: str, images: Sequence[DogImage]) -> Table:
    table = Table(title=title)
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("URL", style="magenta")
    for index, image in enumerate(images, start=1):
        table.add_row(str(index), str(image.url))
    return table


def build_error_panel(error: BaseException | None) -> Panel:
    """Alerta genérica con la descripción del error."""

    message = str(error) if error is not None and str(error) else "Unknown error occurred."
    return Panel(Text(message), title=Text("Error", style="bold red"), border_style="red")
