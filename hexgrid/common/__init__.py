"""
Common utilities for the hex grid generator.

This package provides shared configuration, logging, and error types
used across all components.
"""

from .config import config, AppConfig, load_config, parse_bbox_string
from .logging import (
    logger,
    get_logger,
    setup_logging,
    TimedLogger,
    log_data_processing,
)
from .exceptions import (
    HexGridError,
    InvalidBoundingBox,
    GeometryResolutionError,
    ExportIOError,
)

__all__ = [
    "config",
    "AppConfig",
    "load_config",
    "parse_bbox_string",
    "logger",
    "get_logger",
    "setup_logging",
    "TimedLogger",
    "log_data_processing",
    "HexGridError",
    "InvalidBoundingBox",
    "GeometryResolutionError",
    "ExportIOError",
]
