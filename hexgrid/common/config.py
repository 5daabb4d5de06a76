"""
Configuration management for the hex grid generator.

This module provides centralized configuration loading and validation using Pydantic.
All environment variables are loaded and validated at startup.
"""

import os
from typing import Optional, Literal, List
from pydantic import BaseModel, field_validator, Field
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class GridConfig(BaseModel):
    """H3 grid generation configuration."""

    resolution: int = Field(default=6, description="Default H3 resolution level")
    step_degrees: float = Field(
        default=0.01, description="Sampling step in degrees for the bbox scan"
    )
    default_bbox: List[float] = Field(
        default=[40.4774, -74.2591, 40.9176, -73.7004],
        description="Default bounding box [south, west, north, east]",
    )
    ui_resolutions: List[int] = Field(
        default=[4, 5, 6, 7, 8], description="Resolutions offered by the shell"
    )
    max_samples_warning: int = Field(
        default=1_000_000, description="Log a warning above this many scan samples"
    )

    @field_validator("resolution")
    @classmethod
    def validate_resolution(cls, v):
        """Validate resolution against the H3 range."""
        if not (0 <= v <= 15):
            raise ValueError(f"H3 resolution must be between 0 and 15, got {v}")
        return v

    @field_validator("step_degrees")
    @classmethod
    def validate_step(cls, v):
        """Step must move the scan forward."""
        if v <= 0:
            raise ValueError(f"Sampling step must be positive, got {v}")
        return v

    @field_validator("default_bbox")
    @classmethod
    def validate_bbox(cls, v):
        """Validate bounding box format."""
        if len(v) != 4:
            raise ValueError(
                "Bounding box must have 4 values: [south, west, north, east]"
            )
        return v


class RecordConfig(BaseModel):
    """Cell record building configuration."""

    centroid_method: Literal["mean", "area_weighted"] = Field(
        default="mean", description="Centroid computation for label anchors"
    )


class ExportConfig(BaseModel):
    """CSV export and delivery configuration."""

    filename: str = Field(default="hexagons.csv", description="Export file name")
    content_type: str = Field(
        default="text/csv;charset=utf-8", description="Export content type"
    )
    output_dir: str = Field(default=".", description="Directory for file delivery")
    upload_url: Optional[str] = Field(
        None, description="Optional HTTP endpoint receiving the export"
    )

    # Upload retry configuration
    timeout_seconds: int = Field(default=30, description="Upload timeout in seconds")
    max_retries: int = Field(default=3, description="Maximum number of retry attempts")
    backoff_factor: float = Field(default=1.0, description="Exponential backoff factor")


class RenderConfig(BaseModel):
    """Map rendering hand-off configuration."""

    color: str = Field(default="blue", description="Polygon stroke color")
    weight: int = Field(default=1, description="Polygon stroke weight")
    fill: bool = Field(default=False, description="Fill polygons")
    zoom_level: int = Field(default=11, description="Initial map zoom")
    show_indexes: bool = Field(
        default=False, description="Show sequence id labels at cell centroids"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format_str: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    enable_structured_logging: bool = Field(
        default=True, description="Enable structured JSON logging"
    )


class AppConfig(BaseModel):
    """Main application configuration."""

    grid: GridConfig
    records: RecordConfig
    export: ExportConfig
    render: RenderConfig
    logging: LoggingConfig

    # Environment
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")


def parse_bbox_string(value: str) -> List[float]:
    """Parse 'south,west,north,east' into a list of floats."""
    try:
        return [float(x.strip()) for x in value.split(",")]
    except (ValueError, AttributeError):
        raise ValueError(
            "Bounding box must be comma-separated floats: 'south,west,north,east'"
        )


def load_config() -> AppConfig:
    """Load and validate configuration from environment variables."""

    default_bbox = os.getenv("DEFAULT_BBOX")

    config_dict = {
        "grid": {
            "resolution": int(os.getenv("H3_RESOLUTION", "6")),
            "step_degrees": float(os.getenv("GRID_STEP_DEGREES", "0.01")),
            "max_samples_warning": int(os.getenv("MAX_SAMPLES_WARNING", "1000000")),
        },
        "records": {
            "centroid_method": os.getenv("CENTROID_METHOD", "mean"),
        },
        "export": {
            "filename": os.getenv("EXPORT_FILENAME", "hexagons.csv"),
            "output_dir": os.getenv("EXPORT_OUTPUT_DIR", "."),
            "upload_url": os.getenv("EXPORT_UPLOAD_URL"),
            "timeout_seconds": int(os.getenv("EXPORT_TIMEOUT_SECONDS", "30")),
            "max_retries": int(os.getenv("EXPORT_MAX_RETRIES", "3")),
            "backoff_factor": float(os.getenv("EXPORT_BACKOFF_FACTOR", "1.0")),
        },
        "render": {
            "color": os.getenv("RENDER_COLOR", "blue"),
            "show_indexes": os.getenv("SHOW_INDEXES", "false").lower() == "true",
        },
        "logging": {
            "level": os.getenv("LOG_LEVEL", "INFO"),
            "enable_structured_logging": os.getenv(
                "ENABLE_STRUCTURED_LOGGING", "true"
            ).lower()
            == "true",
        },
        "environment": os.getenv("ENVIRONMENT", "development"),
        "debug": os.getenv("DEBUG", "false").lower() == "true",
    }

    if default_bbox:
        config_dict["grid"]["default_bbox"] = parse_bbox_string(default_bbox)

    return AppConfig(**config_dict)


# Global configuration instance
config = load_config()
