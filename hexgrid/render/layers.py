"""
Render hand-off for map shells.

Converts cell records into plain dictionaries a map front end can draw:
outlined polygons, optional sequence-id labels at the centroids, and the
initial map view for a bounding box.
"""

from typing import Any, Dict, List, Optional, Sequence

from ..common import config
from ..h3.grid import BoundingBox
from ..h3.records import CellRecord


def polygon_layers(records: Sequence[CellRecord]) -> List[Dict[str, Any]]:
    """One outlined, unfilled polygon per record."""
    return [
        {
            "id": record.sequence_id,
            "h3Index": record.cell_id,
            "positions": [[lat, lng] for lat, lng in record.boundary],
            "color": record.display_color,
            "weight": config.render.weight,
            "fill": config.render.fill,
        }
        for record in records
    ]


def label_layers(
    records: Sequence[CellRecord], show_indexes: Optional[bool] = None
) -> List[Dict[str, Any]]:
    """Sequence-id labels anchored at centroids; empty while the toggle is off."""
    show = config.render.show_indexes if show_indexes is None else show_indexes
    if not show:
        return []

    return [
        {
            "id": record.sequence_id,
            "position": [record.centroid[0], record.centroid[1]],
            "text": str(record.sequence_id),
        }
        for record in records
    ]


def map_view(bbox: BoundingBox) -> Dict[str, Any]:
    """Initial map center and zoom for a bounding box."""
    center_lat, center_lng = bbox.center()
    return {"center": [center_lat, center_lng], "zoom": config.render.zoom_level}


def render_payload(
    bbox: BoundingBox,
    records: Sequence[CellRecord],
    show_indexes: Optional[bool] = None,
) -> Dict[str, Any]:
    """Everything a map shell needs to draw one generation result."""
    return {
        "view": map_view(bbox),
        "polygons": polygon_layers(records),
        "labels": label_layers(records, show_indexes),
    }
