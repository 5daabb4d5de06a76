"""
Pytest configuration for hex grid tests
"""

import math
from typing import Dict, List, Tuple

import pytest

from hexgrid.common import GeometryResolutionError
from hexgrid.h3 import BoundingBox


class SquareGridProvider:
    """Provider over a plain lat/lng square grid, ids 'row:col'."""

    def __init__(self, size: float = 0.05):
        self.size = size
        self.point_calls = 0

    def cell_for_point(self, lat: float, lng: float, resolution: int) -> str:
        self.point_calls += 1
        row = math.floor(lat / self.size)
        col = math.floor(lng / self.size)
        return f"{row}:{col}"

    def cell_boundary(self, cell_id: str) -> List[Tuple[float, float]]:
        try:
            row, col = (int(part) for part in cell_id.split(":"))
        except ValueError as e:
            raise GeometryResolutionError(cell_id, str(e)) from e
        south, west = row * self.size, col * self.size
        north, east = south + self.size, west + self.size
        return [(south, west), (south, east), (north, east), (north, west)]


class StaticProvider:
    """Provider returning fixed boundaries; unknown ids fail."""

    def __init__(self, boundaries: Dict[str, List[Tuple[float, float]]]):
        self.boundaries = boundaries

    def cell_for_point(self, lat: float, lng: float, resolution: int) -> str:
        raise NotImplementedError

    def cell_boundary(self, cell_id: str) -> List[Tuple[float, float]]:
        if cell_id not in self.boundaries:
            raise GeometryResolutionError(cell_id, "unknown cell")
        return self.boundaries[cell_id]


@pytest.fixture
def square_provider():
    """Fake provider with 0.05 degree square cells"""
    return SquareGridProvider()


@pytest.fixture
def static_provider():
    """Fake provider with a 2x2 square and a triangle"""
    return StaticProvider(
        {
            "square": [(0.0, 0.0), (0.0, 2.0), (2.0, 2.0), (2.0, 0.0)],
            "triangle": [(40.0, -74.0), (40.1, -74.0), (40.1, -73.9)],
            "empty": [],
        }
    )


@pytest.fixture
def tiny_bbox():
    """Box just under one hundredth of a degree on each side"""
    return BoundingBox(north=1.0, south=0.99, west=0.0, east=0.01)


@pytest.fixture
def small_bbox():
    """Box a tenth of a degree on each side"""
    return BoundingBox(north=0.1, south=0.0, west=0.0, east=0.1)


@pytest.fixture
def manhattan_bbox():
    """Small box over lower Manhattan"""
    return BoundingBox(north=40.72, south=40.70, west=-74.02, east=-74.00)
