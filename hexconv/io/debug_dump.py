from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image


class DebugImageSink:
    """
    Writes intermediate rasters to disk for inspection.

    Files are numbered from `start` in the order they are saved
    ('000_blurred.png', '001_...'). The counter lives on the instance, so
    two sinks never share numbering.
    """

    def __init__(self, directory: Union[str, Path], start: int = 0):
        self.directory = Path(directory)
        self.counter = start

    def save(self, raster: np.ndarray, label: str) -> Optional[Path]:
        height, width = raster.shape[:2]
        if height == 0 or width == 0:
            print(f"[DebugDump] Warning: skipping empty raster '{label}'.")
            return None

        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"{self.counter:03d}_{label}.png"
        self.counter += 1

        Image.fromarray(np.array(raster, dtype=np.uint8)).save(path)
        print(f"[DebugDump] Saved {path}")
        return path
