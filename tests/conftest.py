import cv2
import numpy as np
import pytest

from hexconv.core.raster import make_raster

RED = (255, 0, 0)
BLUE = (0, 0, 255)


@pytest.fixture
def scenario_raster():
    """64x68 white map, red at (16, 17), blue at (48, 17)."""
    raster = make_raster(64, 68, (255, 255, 255))
    raster[17, 16, :3] = RED
    raster[17, 48, :3] = BLUE
    return raster


@pytest.fixture
def write_png(tmp_path):
    """Writes an RGBA array as PNG (through OpenCV's BGRA order) and returns the path."""
    def _write(name, rgba):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        assert cv2.imwrite(str(path), cv2.cvtColor(np.ascontiguousarray(rgba), cv2.COLOR_RGBA2BGRA))
        return path
    return _write
