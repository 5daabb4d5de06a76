"""
Export utilities for the hex grid generator.

This package provides CSV serialization of cell records and the delivery
collaborators that store or send the resulting file.
"""

from .csv_export import (
    TabularExporter,
    COLUMNS,
    format_number,
    format_polygon,
    to_dataframe,
    export_records_to_csv,
)
from .delivery import (
    Delivery,
    DeliveredFile,
    FileSystemDelivery,
    MemoryDelivery,
    HttpUploadDelivery,
)

__all__ = [
    "TabularExporter",
    "COLUMNS",
    "format_number",
    "format_polygon",
    "to_dataframe",
    "export_records_to_csv",
    "Delivery",
    "DeliveredFile",
    "FileSystemDelivery",
    "MemoryDelivery",
    "HttpUploadDelivery",
]
