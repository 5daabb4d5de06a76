"""
H3 hexagonal grid generation for the hex grid generator.

Scans a bounding box on a fixed lat/lng lattice and maps every sample point
to its H3 cell, keeping each cell once in first-discovery order.

The scan is a coverage heuristic, not an exact tessellation of the box.
The step is independent of resolution, so at resolutions whose cells are
smaller than the step, or near the box border, a cell can be missed when no
sample lands inside it. Cells are never duplicated. Cost grows with
(lat span / step) x (lng span / step) regardless of resolution.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple

from shapely.geometry import Polygon

from ..common import (
    config,
    get_logger,
    TimedLogger,
    InvalidBoundingBox,
    parse_bbox_string,
)
from .provider import GeometryProvider, get_default_provider

logger = get_logger("h3.grid")


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular lat/lng region. Antimeridian-crossing boxes are not supported."""

    north: float
    south: float
    west: float
    east: float

    @classmethod
    def from_bbox(cls, bbox: List[float]) -> "BoundingBox":
        """Create BoundingBox from a [south, west, north, east] list."""
        if len(bbox) != 4:
            raise ValueError(
                "Bounding box must have 4 values: [south, west, north, east]"
            )
        return cls(south=bbox[0], west=bbox[1], north=bbox[2], east=bbox[3])

    @classmethod
    def from_string(cls, value: str) -> "BoundingBox":
        """Create BoundingBox from 'south,west,north,east'."""
        return cls.from_bbox(parse_bbox_string(value))

    def is_inverted(self) -> bool:
        return self.south > self.north or self.west > self.east

    def validate(self) -> "BoundingBox":
        """Raise InvalidBoundingBox for boxes the scan would treat as empty."""
        if self.south > self.north:
            raise InvalidBoundingBox(
                f"South edge {self.south} is above north edge {self.north}", self
            )
        if self.west > self.east:
            raise InvalidBoundingBox(
                f"West edge {self.west} is east of east edge {self.east}", self
            )
        return self

    def to_polygon(self) -> Polygon:
        """Convert bounds to Shapely polygon (x=lng, y=lat)."""
        return Polygon(
            [
                (self.west, self.south),
                (self.east, self.south),
                (self.east, self.north),
                (self.west, self.north),
                (self.west, self.south),
            ]
        )

    def center(self) -> Tuple[float, float]:
        """Get center point of the bounds."""
        center_lat = self.south + (self.north - self.south) / 2
        center_lng = self.west + (self.east - self.west) / 2
        return center_lat, center_lng

    def to_dict(self) -> dict:
        return {
            "north": self.north,
            "south": self.south,
            "west": self.west,
            "east": self.east,
        }


def _scan_axis(start: float, stop: float, step: float) -> Iterator[float]:
    # Repeated addition, not start + i * step: the sample lattice must keep
    # the accumulated rounding of the incremental scan.
    value = start
    while value <= stop:
        yield value
        value += step


class GridGenerator:
    """Generates the list of H3 cells covering a bounding box."""

    def __init__(
        self,
        provider: Optional[GeometryProvider] = None,
        step: Optional[float] = None,
    ):
        """
        Initialize grid generator.

        Args:
            provider: Geometry provider (default: shared H3 provider)
            step: Sampling step in degrees for both axes (default: config)
        """
        self.provider = provider or get_default_provider()
        self.step = step if step is not None else config.grid.step_degrees
        self.logger = logger

        if self.step <= 0:
            raise ValueError(f"Sampling step must be positive, got {self.step}")

    def estimate_samples(self, bbox: BoundingBox) -> int:
        """Number of point samples a scan of ``bbox`` will take."""
        lat_count = sum(1 for _ in _scan_axis(bbox.south, bbox.north, self.step))
        lng_count = sum(1 for _ in _scan_axis(bbox.west, bbox.east, self.step))
        return lat_count * lng_count

    def generate(self, bbox: BoundingBox, resolution: int) -> List[str]:
        """
        Generate the cells covering a bounding box.

        Args:
            bbox: Region to scan
            resolution: H3 resolution level

        Returns:
            Unique cell IDs in first-discovery order (latitude outer,
            longitude inner). Empty for an inverted box.
        """
        if bbox.is_inverted():
            self.logger.info(
                "Inverted bounding box, no cells generated",
                extra={"bounds": bbox.to_dict(), "resolution": resolution},
            )
            return []

        samples = self.estimate_samples(bbox)
        if samples > config.grid.max_samples_warning:
            self.logger.warning(
                f"Bounding box scan needs {samples:,} samples",
                extra={"samples": samples, "step": self.step, **bbox.to_dict()},
            )

        with TimedLogger(self.logger, "generate_grid", resolution=resolution):
            cells: List[str] = []
            seen: Set[str] = set()

            for lat in _scan_axis(bbox.south, bbox.north, self.step):
                for lng in _scan_axis(bbox.west, bbox.east, self.step):
                    cell_id = self.provider.cell_for_point(lat, lng, resolution)
                    if cell_id not in seen:
                        seen.add(cell_id)
                        cells.append(cell_id)

            self.logger.info(
                f"Generated {len(cells)} cells",
                extra={
                    "resolution": resolution,
                    "cell_count": len(cells),
                    "samples": samples,
                    "bounds": bbox.to_dict(),
                },
            )

        return cells


# Convenience functions
def get_grid_generator(step: Optional[float] = None) -> GridGenerator:
    """Get grid generator with default or specified step."""
    return GridGenerator(step=step)


def generate_cells(bbox: BoundingBox, resolution: Optional[int] = None) -> List[str]:
    """Generate cells for a bbox using the default provider and step."""
    res = resolution if resolution is not None else config.grid.resolution
    return GridGenerator().generate(bbox, res)
