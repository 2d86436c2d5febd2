import cv2
import numpy as np
from pathlib import Path
from typing import Tuple, Union

from hexconv.shared.errors import ResourceError

Colour = Tuple[int, int, int]


def load_raster(image_path: Union[str, Path]) -> np.ndarray:
    """
    Loads an image as a read-only (H, W, 4) uint8 RGBA array.

    cv2 hands back BGR/BGRA (or a bare 2D array for grayscale), so every
    source layout is normalized here and the rest of the converter only
    ever sees RGBA.
    """
    path = Path(image_path)
    # cv2.imread returns None instead of raising, on missing and undecodable files alike
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ResourceError(f"Could not load image: {path}")

    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    elif img.dtype != np.uint8:
        raise ResourceError(f"Unsupported pixel type {img.dtype} in {path}")

    if img.ndim == 2:
        rgba = cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    elif img.shape[2] == 3:
        rgba = cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    elif img.shape[2] == 4:
        rgba = cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    else:
        raise ResourceError(f"Unsupported channel count {img.shape[2]} in {path}")

    rgba.flags.writeable = False
    return rgba


def make_raster(width: int, height: int, colour: Colour, alpha: int = 255) -> np.ndarray:
    """Solid RGBA raster of the given size."""
    raster = np.empty((height, width, 4), dtype=np.uint8)
    raster[..., :3] = colour
    raster[..., 3] = alpha
    return raster


def pack_rgb(r: int, g: int, b: int) -> int:
    return (r << 16) | (g << 8) | b


def unpack_rgb(value: int) -> Colour:
    """0xRRGGBB -> (r, g, b)"""
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def rgb_to_hex(colour: Colour) -> str:
    """(r, g, b) -> 'rrggbb', the key format of tile-definition files."""
    return f"{pack_rgb(*colour):06x}"
