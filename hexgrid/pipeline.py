"""
Generation pipeline: bounding box -> cells -> records -> CSV.

Each run produces a fresh GridResult. Nothing carries over between runs, so
a new run fully replaces whatever a shell displayed before.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .common import get_logger, TimedLogger
from .export import TabularExporter
from .h3 import BoundingBox, CellRecord, CellRecordBuilder, GridGenerator

logger = get_logger("pipeline")


@dataclass
class GridResult:
    """Output of one generation run."""

    bbox: BoundingBox
    resolution: int
    cell_ids: List[str] = field(default_factory=list)
    records: List[CellRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


class GridPipeline:
    """Wires grid generation, record building and export together."""

    def __init__(
        self,
        generator: Optional[GridGenerator] = None,
        builder: Optional[CellRecordBuilder] = None,
        exporter: Optional[TabularExporter] = None,
    ):
        self.generator = generator or GridGenerator()
        self.builder = builder or CellRecordBuilder()
        self.exporter = exporter or TabularExporter()
        self.logger = logger

    def run(self, bbox: BoundingBox, resolution: int) -> GridResult:
        """Generate cells for a box and build their records."""
        with TimedLogger(self.logger, "grid_pipeline", resolution=resolution):
            cell_ids = self.generator.generate(bbox, resolution)
            records = self.builder.build(cell_ids)
        return GridResult(
            bbox=bbox, resolution=resolution, cell_ids=cell_ids, records=records
        )

    def export(self, result: GridResult) -> bytes:
        """Serialize a result and hand it to the exporter's delivery."""
        return self.exporter.deliver(result.records)
