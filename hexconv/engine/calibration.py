from typing import Optional, Tuple

import numpy as np

from hexconv.core.blur import box_blur
from hexconv.core.tiles import (
    ColourTileDefinition,
    TableKind,
    TileDefinitionTable,
)


def colour_key(template: np.ndarray, radius: Optional[int] = None) -> Tuple[int, int, int]:
    """
    Colour a tile image should be listed under in a colour table.

    This is the centre pixel of the image after a box blur whose radius is
    the distance from the centre to the nearest edge, i.e. what the colour
    lookup will see at a tile centre when run with that blur radius.
    """
    height, width = template.shape[:2]
    if height == 0 or width == 0:
        raise ValueError("Cannot calibrate an empty template")

    if radius is None:
        radius = min(width, height) // 2

    blurred = box_blur(template, radius)
    r, g, b = blurred[height // 2, width // 2, :3]
    return int(r), int(g), int(b)


def calibrate_table(templates: TileDefinitionTable, radius: Optional[int] = None) -> TileDefinitionTable:
    """Turns a template table into the equivalent colour table, order preserved."""
    if templates.kind is not TableKind.TEMPLATE:
        raise ValueError("Calibration needs a template table")

    definitions = []
    for definition in templates:
        colour = colour_key(definition.image, radius)
        print(f"[Calibration] {definition.code}: #{colour[0]:02x}{colour[1]:02x}{colour[2]:02x}")
        definitions.append(ColourTileDefinition(colour, definition.code))

    return TileDefinitionTable(definitions, TableKind.COLOUR)
