"""
Cell record building for the hex grid generator.

Turns an ordered list of cell IDs into display/export records carrying the
boundary ring, a label anchor and a display color.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from shapely.geometry import Polygon

from ..common import (
    config,
    get_logger,
    TimedLogger,
    GeometryResolutionError,
    log_data_processing,
)
from .provider import GeometryProvider, LatLng, get_default_provider

logger = get_logger("h3.records")

CENTROID_METHODS = ("mean", "area_weighted")


@dataclass(frozen=True)
class CellRecord:
    """One cell prepared for rendering and export."""

    sequence_id: int
    cell_id: str
    boundary: Tuple[LatLng, ...]
    centroid: LatLng
    display_color: str = field(default="blue")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "sequence_id": self.sequence_id,
            "cell_id": self.cell_id,
            "boundary": [list(point) for point in self.boundary],
            "centroid": list(self.centroid),
            "display_color": self.display_color,
        }


def constant_color(cell_id: str) -> str:
    """Display color for a cell. Every cell currently gets the configured color."""
    return config.render.color


def mean_centroid(boundary: Sequence[LatLng]) -> LatLng:
    """
    Unweighted mean of the ring vertices.

    Not a true polygon centroid; close enough for small, nearly regular
    hexagons used as label anchors.
    """
    count = len(boundary)
    lat = sum(point[0] for point in boundary) / count
    lng = sum(point[1] for point in boundary) / count
    return lat, lng


def area_weighted_centroid(boundary: Sequence[LatLng]) -> LatLng:
    """Planar area-weighted centroid of the ring, in lat/lng degrees."""
    polygon = Polygon([(lng, lat) for lat, lng in boundary])
    center = polygon.centroid
    return center.y, center.x


class CellRecordBuilder:
    """Builds CellRecords from cell IDs."""

    def __init__(
        self,
        provider: Optional[GeometryProvider] = None,
        color_fn: Optional[Callable[[str], str]] = None,
        centroid_method: Optional[str] = None,
    ):
        """
        Initialize record builder.

        Args:
            provider: Geometry provider (default: shared H3 provider)
            color_fn: Pure function mapping a cell ID to a display color
            centroid_method: "mean" (default) or "area_weighted"
        """
        self.provider = provider or get_default_provider()
        self.color_fn = color_fn or constant_color
        self.centroid_method = centroid_method or config.records.centroid_method
        self.logger = logger

        if self.centroid_method not in CENTROID_METHODS:
            raise ValueError(
                f"Unknown centroid method {self.centroid_method!r}, "
                f"expected one of {CENTROID_METHODS}"
            )

    def _centroid(self, boundary: Sequence[LatLng]) -> LatLng:
        if self.centroid_method == "area_weighted":
            return area_weighted_centroid(boundary)
        return mean_centroid(boundary)

    def build_record(self, cell_id: str, sequence_id: int) -> CellRecord:
        """
        Build a single record.

        Raises:
            GeometryResolutionError: the provider has no boundary for the cell
        """
        boundary = self.provider.cell_boundary(cell_id)
        if not boundary:
            raise GeometryResolutionError(cell_id, "empty boundary")

        ring = tuple((lat, lng) for lat, lng in boundary)
        return CellRecord(
            sequence_id=sequence_id,
            cell_id=cell_id,
            boundary=ring,
            centroid=self._centroid(ring),
            display_color=self.color_fn(cell_id),
        )

    def build(self, cell_ids: Sequence[str], start_index: int = 1) -> List[CellRecord]:
        """
        Build records for cells, preserving order.

        Args:
            cell_ids: Cell IDs in display order
            start_index: sequence_id of the first record

        Returns:
            Records where records[i].cell_id == cell_ids[i] and
            records[i].sequence_id == start_index + i

        Raises:
            GeometryResolutionError: any cell fails; no partial list is returned
        """
        with TimedLogger(self.logger, "build_records", cell_count=len(cell_ids)):
            records = [
                self.build_record(cell_id, start_index + i)
                for i, cell_id in enumerate(cell_ids)
            ]

            self.logger.info(
                "Built cell records",
                extra=log_data_processing(
                    "build_records",
                    records_processed=len(records),
                    centroid_method=self.centroid_method,
                ),
            )

        return records


def build_records(cell_ids: Sequence[str], start_index: int = 1) -> List[CellRecord]:
    """Build records with the default provider and configuration."""
    return CellRecordBuilder().build(cell_ids, start_index=start_index)
