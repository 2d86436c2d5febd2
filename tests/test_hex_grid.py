import numpy as np
import pytest

from hexconv.core.hex_grid import GridGeometry, HexGridTraversal, RegionMode, TileRegion
from hexconv.shared.errors import ConfigurationError


def _geometry(**kw):
    params = dict(tile_width=32, tile_height=34, pitch_x=32, pitch_y=34,
                  offset_x=16, offset_y=17, major_tile_start=False)
    params.update(kw)
    return GridGeometry(**params)


def test_minor_start_staggers_odd_columns():
    geo = _geometry()
    assert not geo.is_staggered(0)
    assert geo.is_staggered(1)
    assert not geo.is_staggered(2)
    assert geo.tile_centre(0, 17) == (16, 17)
    assert geo.tile_centre(1, 17) == (48, 34)


def test_major_start_inverts_parity():
    geo = _geometry(major_tile_start=True)
    assert geo.is_staggered(0)
    assert not geo.is_staggered(1)
    assert geo.tile_centre(0, 17) == (16, 34)
    assert geo.tile_centre(1, 17) == (48, 17)


@pytest.mark.parametrize("field", ["pitch_x", "pitch_y", "tile_width", "tile_height"])
def test_non_positive_sizes_rejected(field):
    with pytest.raises(ConfigurationError):
        _geometry(**{field: 0})


@pytest.mark.parametrize("field", ["offset_x", "offset_y"])
def test_negative_offsets_rejected(field):
    with pytest.raises(ConfigurationError):
        _geometry(**{field: -1})


def test_point_traversal_order_and_bottom_skip():
    traversal = HexGridTraversal(_geometry(), width=64, height=68, mode=RegionMode.POINT)
    tiles = list(traversal)
    assert tiles == [
        (0, 0, TileRegion(16, 17, 1, 1)),
        (0, 1, TileRegion(48, 34, 1, 1)),
        (1, 0, TileRegion(16, 51, 1, 1)),
        # (1, 1) would sample y=68, past the bottom edge
    ]


def test_traversal_is_restartable():
    traversal = HexGridTraversal(_geometry(), width=200, height=200)
    assert list(traversal) == list(traversal)


def test_traversal_is_lazy():
    traversal = HexGridTraversal(_geometry(), width=10_000, height=10_000)
    it = iter(traversal)
    assert next(it) == (0, 0, TileRegion(16, 17, 1, 1))


def test_area_regions_anchor_on_tile_centre():
    geo = _geometry(tile_width=10, tile_height=8)
    traversal = HexGridTraversal(geo, width=64, height=68, mode=RegionMode.AREA)
    tiles = list(traversal)
    assert tiles[0] == (0, 0, TileRegion(11, 13, 10, 8))
    assert tiles[1] == (0, 1, TileRegion(43, 30, 10, 8))


def test_area_regions_clip_at_right_edge():
    geo = _geometry(tile_width=10, tile_height=8)
    traversal = HexGridTraversal(geo, width=50, height=68, mode=RegionMode.AREA)
    region = dict(((r, c), reg) for r, c, reg in traversal)[(0, 1)]
    assert region == TileRegion(43, 30, 7, 8)


def test_area_regions_past_bottom_are_skipped():
    geo = _geometry(tile_width=32, tile_height=34)
    traversal = HexGridTraversal(geo, width=64, height=68, mode=RegionMode.AREA)
    keys = [(r, c) for r, c, _ in traversal]
    # Row 0: column 0 spans y 0..34, column 1 spans 17..51. Row 1 column 0 spans 34..68.
    assert keys == [(0, 0), (0, 1), (1, 0)]


def test_area_regions_clip_at_top_left():
    geo = _geometry(tile_width=10, tile_height=10, offset_x=2, offset_y=3)
    traversal = HexGridTraversal(geo, width=40, height=40, mode=RegionMode.AREA)
    assert next(iter(traversal)) == (0, 0, TileRegion(0, 0, 7, 8))


def test_empty_raster_yields_nothing():
    assert list(HexGridTraversal(_geometry(), width=0, height=0)) == []


def test_region_crop_returns_view():
    raster = np.arange(5 * 6 * 4, dtype=np.uint8).reshape(5, 6, 4)
    region = TileRegion(2, 1, 3, 2)
    crop = region.crop(raster)
    assert crop.shape == (2, 3, 4)
    assert np.array_equal(crop, raster[1:3, 2:5])
