"""
Geometry provider for the hex grid generator.

The tessellation itself (cell encoding, boundaries) is delegated to the
``h3`` package. Generators and builders only depend on the two primitives
declared by :class:`GeometryProvider`, so tests and hosts can substitute
their own provider.
"""

from typing import List, Protocol, Tuple

import h3

from ..common import get_logger, GeometryResolutionError

logger = get_logger("h3.provider")

LatLng = Tuple[float, float]

MIN_RESOLUTION = 0
MAX_RESOLUTION = 15


class GeometryProvider(Protocol):
    """Point-to-cell and cell-to-boundary primitives."""

    def cell_for_point(self, lat: float, lng: float, resolution: int) -> str:
        ...

    def cell_boundary(self, cell_id: str) -> List[LatLng]:
        ...


class H3GeometryProvider:
    """GeometryProvider backed by Uber's H3 library."""

    def __init__(self):
        self.logger = logger

    @staticmethod
    def validate_resolution(resolution: int) -> int:
        """
        Check a resolution against the H3 range.

        Args:
            resolution: H3 resolution level

        Returns:
            The resolution, unchanged
        """
        if not (MIN_RESOLUTION <= resolution <= MAX_RESOLUTION):
            raise ValueError(
                f"H3 resolution must be between {MIN_RESOLUTION} and "
                f"{MAX_RESOLUTION}, got {resolution}"
            )
        return resolution

    def cell_for_point(self, lat: float, lng: float, resolution: int) -> str:
        """
        Convert latitude/longitude to H3 cell ID.

        Args:
            lat: Latitude
            lng: Longitude
            resolution: H3 resolution level

        Returns:
            H3 cell ID string
        """
        self.validate_resolution(resolution)
        return h3.latlng_to_cell(lat, lng, resolution)

    def cell_boundary(self, cell_id: str) -> List[LatLng]:
        """
        Get boundary coordinates for an H3 cell.

        Args:
            cell_id: H3 cell ID string

        Returns:
            List of (latitude, longitude) tuples in H3 ring order
        """
        try:
            boundary = h3.cell_to_boundary(cell_id)
        except (h3.H3BaseException, ValueError, TypeError) as e:
            self.logger.warning(
                f"H3 could not resolve boundary for {cell_id!r}",
                extra={"cell_id": str(cell_id), "error_message": str(e)},
            )
            raise GeometryResolutionError(str(cell_id), str(e)) from e

        return [(lat, lng) for lat, lng in boundary]

    def average_edge_length_km(self, resolution: int) -> float:
        """Average H3 edge length in kilometers at a resolution."""
        return h3.average_hexagon_edge_length(resolution, unit="km")

    def average_area_km2(self, resolution: int) -> float:
        """Average H3 cell area in square kilometers at a resolution."""
        return h3.average_hexagon_area(resolution, unit="km^2")


_default_provider = None


def get_default_provider() -> H3GeometryProvider:
    """Shared H3 provider instance (the provider holds no per-call state)."""
    global _default_provider
    if _default_provider is None:
        _default_provider = H3GeometryProvider()
    return _default_provider
