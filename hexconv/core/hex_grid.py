from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

import numpy as np

from hexconv.shared.errors import ConfigurationError


class RegionMode(Enum):
    POINT = "point"  # single centre pixel (colour lookup)
    AREA = "area"    # tile-sized box around the centre (template matching)


@dataclass(frozen=True)
class GridGeometry:
    """
    Layout of a staggered hex grid rendered as a raster.

    pitch_x / pitch_y: distance between the centres of neighbouring tiles.
    offset_x / offset_y: centre of the top-left tile.
    tile_width / tile_height: size of the box compared against templates.
    major_tile_start: the top-left tile is an upper ("major") tile.
    """
    tile_width: int = 32
    tile_height: int = 34
    pitch_x: int = 32
    pitch_y: int = 34
    offset_x: int = 26
    offset_y: int = 23
    major_tile_start: bool = False

    def __post_init__(self):
        for name in ("pitch_x", "pitch_y", "tile_width", "tile_height"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("offset_x", "offset_y"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be non-negative, got {getattr(self, name)}")

    def is_staggered(self, column: int) -> bool:
        """True if the column sits half a pitch lower than its neighbours."""
        return (column % 2) != int(self.major_tile_start)

    def tile_centre(self, column: int, row_y: int) -> Tuple[int, int]:
        x = self.offset_x + column * self.pitch_x
        y = row_y + self.pitch_y // 2 if self.is_staggered(column) else row_y
        return x, y


@dataclass(frozen=True)
class TileRegion:
    x: int
    y: int
    width: int
    height: int

    def crop(self, raster: np.ndarray) -> np.ndarray:
        """View of the raster covered by this region."""
        return raster[self.y:self.y + self.height, self.x:self.x + self.width]


class HexGridTraversal:
    """
    Iterates (row, column, TileRegion) over every tile of a raster in
    row-major order. Each call to iter() starts a fresh walk.

    Tiles whose region would cross the bottom edge are dropped; anything
    spilling over the other edges is clipped to the raster.
    """

    def __init__(self, geometry: GridGeometry, width: int, height: int,
                 mode: RegionMode = RegionMode.POINT):
        self.geometry = geometry
        self.width = width
        self.height = height
        self.mode = mode

    def __iter__(self) -> Iterator[Tuple[int, int, TileRegion]]:
        geo = self.geometry
        for row, row_y in enumerate(range(geo.offset_y, self.height, geo.pitch_y)):
            for column, _ in enumerate(range(geo.offset_x, self.width, geo.pitch_x)):
                region = self.region_for(column, row_y)
                if region is not None:
                    yield row, column, region

    def region_for(self, column: int, row_y: int) -> TileRegion | None:
        cx, cy = self.geometry.tile_centre(column, row_y)

        if self.mode is RegionMode.POINT:
            if cy >= self.height:
                return None
            return TileRegion(cx, cy, 1, 1)

        top = cy - self.geometry.tile_height // 2
        bottom = top + self.geometry.tile_height
        if bottom > self.height:
            return None

        left = cx - self.geometry.tile_width // 2
        right = min(left + self.geometry.tile_width, self.width)
        left, top = max(left, 0), max(top, 0)
        return TileRegion(left, top, right - left, bottom - top)
