from typing import Optional, Protocol, runtime_checkable

import numpy as np

from hexconv.core.hex_grid import RegionMode

@runtime_checkable
class ITileClassifier(Protocol):
    """
    Interface for the tile matching strategies.
    One implementation is picked per run; the converter only talks to this.
    """

    default_code: str

    @property
    def region_mode(self) -> RegionMode:
        """
        Shape of the pixel region the traversal should hand to classify().
        """
        ...

    def prepare(self, raster: np.ndarray) -> np.ndarray:
        """
        Pre-processes the whole source raster once, before traversal.
        Must return a new array (or the input itself) and never mutate it.
        """
        ...

    def match(self, pixels: np.ndarray) -> Optional[str]:
        """
        Code of the first table entry matching one tile's pixels, or None.
        """
        ...

    def classify(self, pixels: np.ndarray) -> str:
        """
        Maps one tile's pixels to a terrain code. Never fails on a miss:
        unmatched tiles get default_code.
        """
        ...
