"""
H3 hexagonal grid utilities for the hex grid generator.

This package provides the geometry provider, bounding-box grid generation
and cell record building.
"""

from .provider import GeometryProvider, H3GeometryProvider, get_default_provider
from .grid import (
    BoundingBox,
    GridGenerator,
    generate_cells,
    get_grid_generator,
)
from .records import (
    CellRecord,
    CellRecordBuilder,
    build_records,
    constant_color,
    mean_centroid,
    area_weighted_centroid,
)

__all__ = [
    "GeometryProvider",
    "H3GeometryProvider",
    "get_default_provider",
    "BoundingBox",
    "GridGenerator",
    "generate_cells",
    "get_grid_generator",
    "CellRecord",
    "CellRecordBuilder",
    "build_records",
    "constant_color",
    "mean_centroid",
    "area_weighted_centroid",
]
