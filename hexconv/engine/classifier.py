from typing import Optional

import numpy as np

from hexconv.core.blur import box_blur
from hexconv.core.hex_grid import RegionMode
from hexconv.core.tiles import DEFAULT_TERRAIN_CODE, TableKind, TileDefinitionTable
from hexconv.engine.interfaces import ITileClassifier
from hexconv.shared.errors import ConfigurationError

# Off-by-one slack for colours that went through the blur's integer division
COLOUR_TOLERANCE = 1
DEFAULT_THRESHOLD = 3


class ColourLookupClassifier:
    """
    Matches the colour of a tile's centre pixel against a colour table.
    A definition matches when every RGBA channel is within COLOUR_TOLERANCE
    (inclusive). Definitions carry no alpha and are treated as opaque.
    """

    def __init__(self, table: TileDefinitionTable, blur_radius: int = 0,
                 default_code: str = DEFAULT_TERRAIN_CODE):
        if table.kind is not TableKind.COLOUR:
            raise ConfigurationError("Colour lookup needs a colour tile table")
        if blur_radius < 0:
            raise ConfigurationError(f"Blur radius must be non-negative, got {blur_radius}")

        self.blur_radius = blur_radius
        self.default_code = default_code
        self._codes = table.codes

        # (N, 4) int16 so the subtraction below cannot wrap around
        self._keys = np.zeros((len(table), 4), dtype=np.int16)
        for i, definition in enumerate(table):
            self._keys[i, :3] = definition.colour
        self._keys[:, 3] = 255

    @property
    def region_mode(self) -> RegionMode:
        return RegionMode.POINT

    def prepare(self, raster: np.ndarray) -> np.ndarray:
        if self.blur_radius == 0:
            return raster
        print(f"[Classifier] Blurring source with radius {self.blur_radius}...")
        return box_blur(raster, self.blur_radius)

    def match(self, pixels: np.ndarray) -> Optional[str]:
        if pixels.size == 0:
            return None

        candidate = pixels.reshape(-1, pixels.shape[-1])[0, :4].astype(np.int16)
        hits = np.flatnonzero(np.all(np.abs(self._keys - candidate) <= COLOUR_TOLERANCE, axis=1))

        # First entry wins, not the closest one
        return self._codes[hits[0]] if hits.size else None

    def classify(self, pixels: np.ndarray) -> str:
        code = self.match(pixels)
        return self.default_code if code is None else code


class TemplateMatchClassifier:
    """
    Compares a tile-sized region against template images.

    Only pixels of the region with alpha == 255 take part; anything with
    transparency is ignored. Every opaque pixel must be within `threshold`
    (exclusive) on R, G and B for the template to match. Templates of a
    different size than the region never match.
    """

    def __init__(self, table: TileDefinitionTable, threshold: int = DEFAULT_THRESHOLD,
                 default_code: str = DEFAULT_TERRAIN_CODE):
        if table.kind is not TableKind.TEMPLATE:
            raise ConfigurationError("Template matching needs a template tile table")
        if threshold <= 0:
            raise ConfigurationError(f"Threshold must be positive, got {threshold}")

        self.threshold = threshold
        self.default_code = default_code
        self._templates = [
            (definition.image[..., :3].astype(np.int16), definition.code)
            for definition in table
        ]

    @property
    def region_mode(self) -> RegionMode:
        return RegionMode.AREA

    def prepare(self, raster: np.ndarray) -> np.ndarray:
        return raster

    def match(self, pixels: np.ndarray) -> Optional[str]:
        opaque = pixels[..., 3] == 255
        region_rgb = pixels[..., :3].astype(np.int16)

        for template_rgb, code in self._templates:
            if template_rgb.shape != region_rgb.shape:
                continue
            diff = np.abs(region_rgb[opaque] - template_rgb[opaque])
            if np.all(diff < self.threshold):
                return code

        return None

    def classify(self, pixels: np.ndarray) -> str:
        code = self.match(pixels)
        return self.default_code if code is None else code


def build_classifier(mode: str, table: TileDefinitionTable,
                     blur_radius: int = 0, threshold: int = DEFAULT_THRESHOLD) -> ITileClassifier:
    """Picks the matching strategy for a run."""
    if mode == "colour":
        return ColourLookupClassifier(table, blur_radius=blur_radius)
    if mode == "template":
        if blur_radius:
            print("[Classifier] Warning: blur radius is ignored in template mode.")
        return TemplateMatchClassifier(table, threshold=threshold)
    raise ConfigurationError(f"Unknown classifier mode '{mode}' (expected 'colour' or 'template')")
