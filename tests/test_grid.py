"""
Tests for bounding box scanning and cell generation
"""

import h3
import pytest

from hexgrid.common import InvalidBoundingBox
from hexgrid.h3 import BoundingBox, GridGenerator, H3GeometryProvider


class TestBoundingBox:
    """BoundingBox helpers"""

    def test_from_bbox_order(self):
        bbox = BoundingBox.from_bbox([40.4774, -74.2591, 40.9176, -73.7004])
        assert bbox.south == 40.4774
        assert bbox.west == -74.2591
        assert bbox.north == 40.9176
        assert bbox.east == -73.7004

    def test_from_bbox_wrong_length(self):
        with pytest.raises(ValueError):
            BoundingBox.from_bbox([1.0, 2.0, 3.0])

    def test_from_string(self):
        bbox = BoundingBox.from_string("0.99, 0.0, 1.0, 0.01")
        assert bbox == BoundingBox(north=1.0, south=0.99, west=0.0, east=0.01)

    def test_from_string_garbage(self):
        with pytest.raises(ValueError):
            BoundingBox.from_string("north,south,west,east")

    def test_center(self):
        bbox = BoundingBox(north=2.0, south=0.0, west=-4.0, east=0.0)
        assert bbox.center() == (1.0, -2.0)

    def test_validate_inverted(self):
        with pytest.raises(InvalidBoundingBox):
            BoundingBox(north=0.0, south=1.0, west=0.0, east=1.0).validate()
        with pytest.raises(InvalidBoundingBox):
            BoundingBox(north=1.0, south=0.0, west=1.0, east=0.0).validate()

    def test_to_polygon_bounds(self, small_bbox):
        assert small_bbox.to_polygon().bounds == (0.0, 0.0, 0.1, 0.1)


class TestGridGenerator:
    """Grid generation with a fake square provider"""

    def test_no_duplicates(self, square_provider, small_bbox):
        cells = GridGenerator(provider=square_provider).generate(small_bbox, 0)
        assert len(set(cells)) == len(cells)
        assert square_provider.point_calls > len(cells)

    def test_first_discovery_order(self, square_provider, small_bbox):
        cells = GridGenerator(provider=square_provider).generate(small_bbox, 0)
        positions = [tuple(int(part) for part in cell.split(":")) for cell in cells]

        assert cells[0] == square_provider.cell_for_point(0.0, 0.0, 0)
        # latitude outer, longitude inner
        assert positions == sorted(positions)

    def test_inverted_latitude_is_empty(self, square_provider):
        bbox = BoundingBox(north=0.0, south=0.5, west=0.0, east=0.5)
        assert GridGenerator(provider=square_provider).generate(bbox, 0) == []
        assert square_provider.point_calls == 0

    def test_inverted_longitude_is_empty(self, square_provider):
        bbox = BoundingBox(north=0.5, south=0.0, west=0.5, east=0.0)
        assert GridGenerator(provider=square_provider).generate(bbox, 0) == []
        assert square_provider.point_calls == 0

    def test_zero_area_box(self, square_provider):
        bbox = BoundingBox(north=0.3, south=0.3, west=0.2, east=0.2)
        cells = GridGenerator(provider=square_provider).generate(bbox, 0)
        assert len(cells) == 1
        assert square_provider.point_calls == 1

    def test_span_smaller_than_step(self, square_provider):
        bbox = BoundingBox(north=0.004, south=0.0, west=0.0, east=0.004)
        generator = GridGenerator(provider=square_provider)
        assert generator.estimate_samples(bbox) == 1
        assert len(generator.generate(bbox, 0)) == 1

    def test_estimate_samples(self):
        bbox = BoundingBox(north=0.02, south=0.0, west=0.0, east=0.01)
        assert GridGenerator(provider=H3GeometryProvider()).estimate_samples(bbox) == 6

    def test_estimate_samples_matches_calls(self, square_provider, small_bbox):
        generator = GridGenerator(provider=square_provider)
        generator.generate(small_bbox, 0)
        assert generator.estimate_samples(small_bbox) == square_provider.point_calls

    def test_coarse_step_can_miss_cells(self, square_provider):
        bbox = BoundingBox(north=0.0, south=0.0, west=0.0, east=0.2)
        fine = GridGenerator(provider=square_provider, step=0.01).generate(bbox, 0)
        coarse = GridGenerator(provider=square_provider, step=0.12).generate(bbox, 0)
        assert len(coarse) < len(fine)

    def test_step_must_be_positive(self, square_provider):
        with pytest.raises(ValueError):
            GridGenerator(provider=square_provider, step=0)

    def test_calls_are_independent(self, square_provider, small_bbox, tiny_bbox):
        generator = GridGenerator(provider=square_provider)
        first = generator.generate(small_bbox, 0)
        generator.generate(tiny_bbox, 0)
        assert generator.generate(small_bbox, 0) == first


class TestGridGeneratorH3:
    """Grid generation against the real H3 library"""

    def test_tiny_box_produces_cells(self, tiny_bbox):
        cells = GridGenerator().generate(tiny_bbox, 7)
        assert len(cells) >= 1
        assert all(h3.is_valid_cell(cell) for cell in cells)
        assert all(h3.get_resolution(cell) == 7 for cell in cells)

    def test_first_cell_contains_south_west_corner(self, manhattan_bbox):
        cells = GridGenerator().generate(manhattan_bbox, 6)
        assert cells[0] == h3.latlng_to_cell(40.70, -74.02, 6)

    def test_no_duplicates(self, manhattan_bbox):
        cells = GridGenerator().generate(manhattan_bbox, 8)
        assert len(set(cells)) == len(cells)

    def test_invalid_resolution(self, tiny_bbox):
        with pytest.raises(ValueError):
            GridGenerator().generate(tiny_bbox, 16)
