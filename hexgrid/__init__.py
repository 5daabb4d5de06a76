"""
Hex grid generator.

This package provides:
- Common utilities (config, logging, error types)
- H3 grid generation over a bounding box and cell record building
- CSV export with pluggable delivery (file system, memory, HTTP upload)
- Render hand-off for map shells
"""

# Re-export key components for convenience
from .common import config, logger, get_logger
from .h3 import BoundingBox, GridGenerator, CellRecord, CellRecordBuilder
from .export import TabularExporter
from .pipeline import GridPipeline, GridResult

__version__ = "1.0.0"

__all__ = [
    # Configuration and logging
    "config",
    "logger",
    "get_logger",
    # Grid
    "BoundingBox",
    "GridGenerator",
    "CellRecord",
    "CellRecordBuilder",
    # Export
    "TabularExporter",
    # Pipeline
    "GridPipeline",
    "GridResult",
]
