from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

import numpy as np

from hexconv.shared.errors import ConfigurationError, DelimiterCollisionError

# Generic grass, used for every tile nothing in the table matches
DEFAULT_TERRAIN_CODE = "Gg"

# Characters that would break the "a, b, c" rows of the map file
FORBIDDEN_CODE_CHARS = (",", " ", "\t", "\n", "\r")


def validate_code(code: str) -> str:
    if not code:
        raise DelimiterCollisionError("Terrain code must not be empty")
    for ch in FORBIDDEN_CODE_CHARS:
        if ch in code:
            raise DelimiterCollisionError(f"Terrain code {code!r} contains delimiter {ch!r}")
    return code


@dataclass(frozen=True)
class ColourTileDefinition:
    colour: Tuple[int, int, int]
    code: str

    def __post_init__(self):
        validate_code(self.code)


@dataclass(frozen=True)
class TemplateTileDefinition:
    image: np.ndarray = field(compare=False, repr=False)
    code: str
    source: Optional[Path] = None

    def __post_init__(self):
        validate_code(self.code)

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height)"""
        return self.image.shape[1], self.image.shape[0]


TileDefinition = Union[ColourTileDefinition, TemplateTileDefinition]


class TableKind(Enum):
    COLOUR = "colour"
    TEMPLATE = "template"


class TileDefinitionTable:
    """
    Ordered, immutable list of tile definitions.
    Order is significant: classifiers return the FIRST matching entry.
    """

    def __init__(self, definitions: Iterable[TileDefinition] = (), kind: Optional[TableKind] = None):
        self._definitions: Tuple[TileDefinition, ...] = tuple(definitions)
        self.kind = kind if kind is not None else self._infer_kind()

        expected = ColourTileDefinition if self.kind is TableKind.COLOUR else TemplateTileDefinition
        for d in self._definitions:
            if not isinstance(d, expected):
                raise ConfigurationError(
                    f"Cannot mix {type(d).__name__} into a {self.kind.value} table"
                )

    def _infer_kind(self) -> TableKind:
        if self._definitions and isinstance(self._definitions[0], TemplateTileDefinition):
            return TableKind.TEMPLATE
        return TableKind.COLOUR

    def __iter__(self) -> Iterator[TileDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __getitem__(self, index: int) -> TileDefinition:
        return self._definitions[index]

    @property
    def codes(self) -> Tuple[str, ...]:
        return tuple(d.code for d in self._definitions)

    def __repr__(self) -> str:
        return f"TileDefinitionTable(kind={self.kind.value}, entries={len(self)})"
