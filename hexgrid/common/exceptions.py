"""
Error types for the hex grid generator.

All core errors are raised synchronously to the immediate caller. Nothing in
the core retries or substitutes fallback geometry.
"""

from typing import Optional


class HexGridError(Exception):
    """Base class for hex grid errors."""


class InvalidBoundingBox(HexGridError, ValueError):
    """Raised when a caller asks for strict validation of an inverted box."""

    def __init__(self, message: str, bbox: Optional[object] = None):
        super().__init__(message)
        self.bbox = bbox


class GeometryResolutionError(HexGridError):
    """The geometry provider could not produce a boundary for a cell."""

    def __init__(self, cell_id: str, reason: Optional[str] = None):
        message = f"Cannot resolve boundary for cell {cell_id!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.cell_id = cell_id
        self.reason = reason


class ExportIOError(HexGridError):
    """A delivery collaborator failed to store or send an export payload."""

    def __init__(self, filename: str, reason: str):
        super().__init__(f"Failed to deliver {filename}: {reason}")
        self.filename = filename
        self.reason = reason
