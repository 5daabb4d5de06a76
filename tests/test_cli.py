"""
Tests for the command line shell
"""

import json

import pandas as pd
import pytest

from hexgrid.cli import build_parser, main, resolve_bbox
from hexgrid.h3 import BoundingBox

TINY_BOX = ["--north", "1.0", "--south", "0.99", "--west", "0.0", "--east", "0.01"]


def test_exports_csv(tmp_path, capsys):
    main(TINY_BOX + ["--resolution", "7", "--output-dir", str(tmp_path)])

    df = pd.read_csv(tmp_path / "hexagons.csv")
    assert list(df.columns) == ["polygonId", "h3Index", "polygon"]
    assert df["polygonId"].iloc[0] == 1
    assert "SUCCESS" in capsys.readouterr().out


def test_dry_run_writes_nothing(tmp_path, capsys):
    main(TINY_BOX + ["--output-dir", str(tmp_path), "--dry-run"])

    assert not (tmp_path / "hexagons.csv").exists()
    assert "DRY RUN" in capsys.readouterr().out


def test_layers_with_labels(tmp_path):
    layers_path = tmp_path / "layers.json"
    main(TINY_BOX + ["--dry-run", "--show-indexes", "--layers", str(layers_path)])

    payload = json.loads(layers_path.read_text())
    assert len(payload["polygons"]) == len(payload["labels"]) >= 1
    assert payload["labels"][0]["text"] == "1"


def test_strict_rejects_inverted_box(tmp_path):
    args = ["--north", "0.0", "--south", "1.0", "--west", "0.0", "--east", "1.0"]
    with pytest.raises(SystemExit) as exc_info:
        main(args + ["--strict", "--output-dir", str(tmp_path)])
    assert exc_info.value.code == 1


def test_inverted_box_without_strict_exports_header(tmp_path):
    args = ["--north", "0.0", "--south", "1.0", "--west", "0.0", "--east", "1.0"]
    main(args + ["--output-dir", str(tmp_path)])
    assert (tmp_path / "hexagons.csv").read_bytes() == b"polygonId,h3Index,polygon\r\n"


def test_invalid_resolution_exits(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main(TINY_BOX + ["--resolution", "16", "--output-dir", str(tmp_path)])
    assert exc_info.value.code == 1


def test_partial_edges_rejected():
    args = build_parser().parse_args(["--north", "1.0", "--south", "0.0"])
    with pytest.raises(ValueError):
        resolve_bbox(args)


def test_bbox_string():
    args = build_parser().parse_args(["--bbox", "0.99,0.0,1.0,0.01"])
    assert resolve_bbox(args) == BoundingBox(north=1.0, south=0.99, west=0.0, east=0.01)


def test_predefined_city():
    args = build_parser().parse_args(["--city", "New York"])
    assert resolve_bbox(args).north == 40.9176


def test_unknown_city():
    args = build_parser().parse_args(["--city", "Atlantis"])
    with pytest.raises(ValueError):
        resolve_bbox(args)
