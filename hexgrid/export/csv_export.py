"""
CSV export of cell records.

Columns are ``polygonId,h3Index,polygon``. The polygon column lists the
boundary ring as ``[lat, lng]`` pairs joined by ``"; "``. Numbers are
rendered the way a JavaScript number prints by default, so ``40.0`` becomes
``40`` and ``40.1`` stays ``40.1``.
"""

import math
from decimal import Decimal
from typing import Optional, Sequence

import pandas as pd

from ..common import config, get_logger, TimedLogger, log_data_processing
from ..h3.records import CellRecord
from .delivery import Delivery, FileSystemDelivery

logger = get_logger("export.csv")

COLUMNS = ["polygonId", "h3Index", "polygon"]
LINE_TERMINATOR = "\r\n"
ENCODING = "utf-8"


def format_number(value: float) -> str:
    """Shortest round-trip text for a number, without a trailing '.0'."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")

    mantissa, exponent = text.split("e")
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def format_polygon(boundary: Sequence[Sequence[float]]) -> str:
    """Render a ring as '[lat1, lng1]; [lat2, lng2]; ...'."""
    return "; ".join(
        f"[{format_number(lat)}, {format_number(lng)}]" for lat, lng in boundary
    )


def to_dataframe(records: Sequence[CellRecord]) -> pd.DataFrame:
    """Tabular form of records, one row per record in input order."""
    rows = [
        {
            "polygonId": record.sequence_id,
            "h3Index": str(record.cell_id),
            "polygon": format_polygon(record.boundary),
        }
        for record in records
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


class TabularExporter:
    """Serializes cell records to CSV and hands the bytes to a delivery."""

    def __init__(
        self,
        delivery: Optional[Delivery] = None,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ):
        """
        Initialize exporter.

        Args:
            delivery: Collaborator receiving the CSV bytes (default: file system)
            filename: Output file name (default: hexagons.csv)
            content_type: Content type passed to the delivery
        """
        self.delivery = delivery
        self.filename = filename or config.export.filename
        self.content_type = content_type or config.export.content_type
        self.logger = logger

    def export(self, records: Sequence[CellRecord]) -> bytes:
        """
        Serialize records to UTF-8 CSV bytes.

        The same record list always produces byte-identical output.
        """
        df = to_dataframe(records)
        text = df.to_csv(index=False, lineterminator=LINE_TERMINATOR)
        return text.encode(ENCODING)

    def deliver(self, records: Sequence[CellRecord]) -> bytes:
        """
        Export records and hand the payload to the delivery.

        Returns:
            The delivered CSV bytes

        Raises:
            ExportIOError: raised by the delivery
        """
        delivery = self.delivery or FileSystemDelivery()

        with TimedLogger(self.logger, f"export_csv: {self.filename}"):
            payload = self.export(records)
            delivery.deliver(payload, self.filename, self.content_type)

            self.logger.info(
                "Exported cell records",
                extra=log_data_processing(
                    "export_csv",
                    records_processed=len(records),
                    export_filename=self.filename,
                    bytes=len(payload),
                ),
            )

        return payload


def export_records_to_csv(
    records: Sequence[CellRecord], output_dir: Optional[str] = None
) -> bytes:
    """Export records to ``<output_dir>/hexagons.csv`` on disk."""
    exporter = TabularExporter(delivery=FileSystemDelivery(output_dir))
    return exporter.deliver(records)
