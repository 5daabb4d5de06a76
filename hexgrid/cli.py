"""
Command line shell for the hex grid generator.

Collects a bounding box and resolution, generates the covering H3 cells,
and exports them as CSV.

Usage:
    hexgrid --city "New York" --resolution 6
    hexgrid --bbox "40.4774,-74.2591,40.9176,-73.7004" --output-dir out/
    hexgrid --north 1.0 --south 0.99 --west 0.0 --east 0.01 --dry-run
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .common import config, get_logger, HexGridError
from .export import FileSystemDelivery, HttpUploadDelivery, TabularExporter
from .h3 import BoundingBox, CellRecordBuilder, GridGenerator, H3GeometryProvider
from .pipeline import GridPipeline, GridResult
from .render import render_payload

logger = get_logger("cli")

PREDEFINED_BOUNDS = {
    "new york": BoundingBox(north=40.9176, south=40.4774, west=-74.2591, east=-73.7004),
    "dubai": BoundingBox(north=25.4, south=24.9, west=54.8, east=55.6),
    "london": BoundingBox(north=51.6918, south=51.2868, west=-0.5103, east=0.3340),
    "singapore": BoundingBox(north=1.4784, south=1.1304, west=103.6026, east=104.0120),
    "paris": BoundingBox(north=48.9021, south=48.8155, west=2.2241, east=2.4699),
    "tokyo": BoundingBox(north=35.8177, south=35.5322, west=139.3796, east=139.9190),
    "san francisco": BoundingBox(
        north=37.8199, south=37.7081, west=-122.5125, east=-122.3574
    ),
}


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="hexgrid",
        description="Generate the H3 cells covering a bounding box and export them as CSV",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--bbox",
        type=str,
        help='Bounding box as "south,west,north,east" (overrides config)',
    )
    parser.add_argument("--north", type=float, help="North edge in degrees")
    parser.add_argument("--south", type=float, help="South edge in degrees")
    parser.add_argument("--west", type=float, help="West edge in degrees")
    parser.add_argument("--east", type=float, help="East edge in degrees")
    parser.add_argument("--city", type=str, help="Use predefined bounds for a city")

    parser.add_argument(
        "--resolution",
        type=int,
        default=config.grid.resolution,
        help="H3 resolution level (0-15)",
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        default=config.export.output_dir,
        help="Directory for the CSV export",
    )
    parser.add_argument(
        "--filename", type=str, default=config.export.filename, help="CSV file name"
    )
    parser.add_argument(
        "--upload-url", type=str, help="POST the CSV to this URL instead of writing it"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject boxes with south > north or west > east instead of returning no cells",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Generate cells but do not export"
    )
    parser.add_argument(
        "--show-indexes",
        action="store_true",
        default=config.render.show_indexes,
        help="Include sequence id labels in the render layers",
    )
    parser.add_argument("--layers", type=str, help="Write render layers as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    return parser


def resolve_bbox(args: argparse.Namespace) -> BoundingBox:
    """Pick the bounding box from the arguments, falling back to config."""
    edges = [args.north, args.south, args.west, args.east]

    if args.bbox:
        return BoundingBox.from_string(args.bbox)

    if any(edge is not None for edge in edges):
        if any(edge is None for edge in edges):
            raise ValueError("--north, --south, --west and --east must be given together")
        return BoundingBox(
            north=args.north, south=args.south, west=args.west, east=args.east
        )

    if args.city:
        bbox = PREDEFINED_BOUNDS.get(args.city.lower())
        if bbox is None:
            raise ValueError(
                f"No predefined bounds for city '{args.city}'. Please provide --bbox"
            )
        return bbox

    return BoundingBox.from_bbox(config.grid.default_bbox)


def validate_inputs(args: argparse.Namespace) -> Dict[str, Any]:
    """Validate and prepare inputs for grid generation."""
    bbox = resolve_bbox(args)
    if args.strict:
        bbox.validate()

    resolution = H3GeometryProvider.validate_resolution(args.resolution)
    if resolution not in config.grid.ui_resolutions:
        logger.info(
            f"Resolution {resolution} is outside the usual range",
            extra={"ui_resolutions": config.grid.ui_resolutions},
        )

    return {"bbox": bbox, "resolution": resolution}


def create_pipeline(args: argparse.Namespace) -> GridPipeline:
    """Build a pipeline whose exporter delivers where the arguments say."""
    if args.upload_url:
        delivery = HttpUploadDelivery(url=args.upload_url)
    else:
        delivery = FileSystemDelivery(args.output_dir)

    return GridPipeline(
        generator=GridGenerator(),
        builder=CellRecordBuilder(),
        exporter=TabularExporter(delivery=delivery, filename=args.filename),
    )


def write_layers(result: GridResult, path: str, show_indexes: bool) -> None:
    """Save the render hand-off for a result as JSON."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = render_payload(result.bbox, result.records, show_indexes)
    output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info(f"Render layers saved to {output_path}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main execution function."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        # every component logger carries its own level and handler
        for name in list(logging.Logger.manager.loggerDict):
            if name == "hexgrid" or name.startswith("hexgrid."):
                component_logger = logging.getLogger(name)
                component_logger.setLevel(logging.DEBUG)
                for handler in component_logger.handlers:
                    handler.setLevel(logging.DEBUG)

    try:
        inputs = validate_inputs(args)
        bbox, resolution = inputs["bbox"], inputs["resolution"]

        pipeline = create_pipeline(args)
        samples = pipeline.generator.estimate_samples(bbox)
        result = pipeline.run(bbox, resolution)

        if args.layers:
            write_layers(result, args.layers, args.show_indexes)

        if args.dry_run:
            print(f"\n✅ DRY RUN: Generated {len(result)} hexes from {samples:,} samples")
        else:
            payload = pipeline.export(result)
            print(
                f"\n✅ SUCCESS: Exported {len(result)} hexes to {args.filename} "
                f"({len(payload):,} bytes)"
            )

        provider = H3GeometryProvider()
        print(f"   Resolution: {resolution}")
        print(f"   Hex Area: {provider.average_area_km2(resolution):.4f} km²")
        print(
            f"   Hex Edge Length: {provider.average_edge_length_km(resolution):.4f} km"
        )
        print(
            f"   Bounds: N {bbox.north:.4f}, S {bbox.south:.4f}, "
            f"W {bbox.west:.4f}, E {bbox.east:.4f}"
        )

    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user")
        sys.exit(1)
    except (HexGridError, ValueError) as e:
        logger.error(f"Grid generation failed: {e}")
        print(f"\n❌ ERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
