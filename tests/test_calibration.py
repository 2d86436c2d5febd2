import numpy as np
import pytest

from hexconv.core.raster import make_raster
from hexconv.core.tiles import TableKind, TemplateTileDefinition, TileDefinitionTable
from hexconv.engine.calibration import calibrate_table, colour_key
from hexconv.engine.classifier import ColourLookupClassifier


def test_solid_template_keys_to_its_colour():
    assert colour_key(make_raster(32, 34, (0x71, 0x93, 0xBF))) == (0x71, 0x93, 0xBF)


def test_default_radius_reaches_nearest_edge():
    # 5x5 with a 1px red border; radius 2 from the centre covers the whole tile
    tile = make_raster(5, 5, (200, 0, 0))
    tile[1:4, 1:4, :3] = (0, 0, 0)
    # Rows 0 and 4 average to 200, rows 1-3 to 80; then (200 + 3 * 80 + 200) // 5
    r, g, b = colour_key(tile)
    assert (g, b) == (0, 0)
    assert r == 128


def test_explicit_radius_zero_reads_centre_pixel():
    tile = make_raster(5, 5, (200, 0, 0))
    tile[2, 2, :3] = (1, 2, 3)
    assert colour_key(tile, radius=0) == (1, 2, 3)


def test_empty_template_rejected():
    with pytest.raises(ValueError):
        colour_key(np.zeros((0, 3, 4), dtype=np.uint8))


def test_calibrated_table_classifies_blurred_centre():
    grass = make_raster(8, 8, (10, 160, 20))
    water = make_raster(8, 8, (20, 40, 180))
    templates = TileDefinitionTable(
        [TemplateTileDefinition(grass, "Gg"), TemplateTileDefinition(water, "Wog")],
        TableKind.TEMPLATE,
    )
    colours = calibrate_table(templates)

    assert colours.kind is TableKind.COLOUR
    assert colours.codes == ("Gg", "Wog")
    clf = ColourLookupClassifier(colours, blur_radius=4)
    prepared = clf.prepare(water)
    assert clf.classify(prepared[4:5, 4:5]) == "Wog"


def test_calibrate_requires_templates():
    with pytest.raises(ValueError):
        calibrate_table(TileDefinitionTable())
