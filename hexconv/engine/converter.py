from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from hexconv.core.hex_grid import GridGeometry, HexGridTraversal
from hexconv.core.raster import load_raster
from hexconv.core.tiles import TableKind
from hexconv.engine.classifier import build_classifier
from hexconv.engine.interfaces import ITileClassifier
from hexconv.engine.serializer import MapSerializer
from hexconv.io.debug_dump import DebugImageSink
from hexconv.io.map_writer import write_map
from hexconv.io.tile_loader import TileTableLoader
from hexconv.shared.config import ConverterConfig
from hexconv.shared.errors import ConfigurationError


@dataclass
class ConversionStats:
    tiles: int = 0
    defaulted: int = 0
    rows: int = 0


class MapConverter:
    """
    Walks the hex grid of a raster and turns every tile into a terrain code.
    Stateless between runs apart from the stats of the last convert().
    """

    def __init__(self, geometry: GridGeometry, classifier: ITileClassifier,
                 debug_sink: Optional[DebugImageSink] = None):
        self.geometry = geometry
        self.classifier = classifier
        self.debug_sink = debug_sink
        self.stats = ConversionStats()

    def convert(self, raster: np.ndarray) -> str:
        height, width = raster.shape[:2]
        prepared = self.classifier.prepare(raster)
        if self.debug_sink is not None:
            self.debug_sink.save(prepared, "prepared")

        traversal = HexGridTraversal(self.geometry, width, height, self.classifier.region_mode)
        serializer = MapSerializer()
        stats = ConversionStats()
        default_code = self.classifier.default_code

        for row, _column, region in traversal:
            code = self.classifier.match(region.crop(prepared))
            if code is None:
                code = default_code
                stats.defaulted += 1
            serializer.add(row, code)
            stats.tiles += 1

        stats.rows = serializer.row_count
        self.stats = stats
        print(f"[Converter] Classified {stats.tiles} tiles in {stats.rows} rows "
              f"({stats.defaulted} fell back to '{default_code}').")
        return serializer.render()


def run_conversion(config: ConverterConfig) -> Path:
    """
    Full run: tile table -> source raster -> conversion -> output file.
    Everything that can fail on I/O is loaded before the traversal starts,
    and the output is only written once the whole map is rendered.
    """
    if config.input_path is None:
        raise ConfigurationError("No input image given")

    print(f"--- Converting {config.input_path} ({config.mode} mode) ---")

    # 1. Tile definitions (templates are loaded eagerly)
    loader = TileTableLoader()
    kind = TableKind(config.mode)
    if config.data_explicit:
        table = loader.load(config.data_path, kind)
    else:
        table = loader.load_default(config.data_path, kind)

    # 2. Source raster
    raster = load_raster(config.input_path)
    print(f"[Converter] Source image: {raster.shape[1]}x{raster.shape[0]}")

    # 3. Convert
    classifier = build_classifier(config.mode, table, config.blur_radius, config.threshold)
    sink = DebugImageSink(config.dump_dir) if config.dump_dir is not None else None
    converter = MapConverter(config.geometry(), classifier, debug_sink=sink)
    text = converter.convert(raster)

    # 4. Save
    output = write_map(text, config.output_path)
    print("--- Done! ---")
    return output
