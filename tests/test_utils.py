"""Tests for catalog parsing and height-map composition."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from blockwfc.block import Axis, BlockConfiguration
from blockwfc.cache import AdjacencyCache
from blockwfc.errors import InvalidAxisError, InvalidGridError, InvalidIdError
from blockwfc.policy import HeightPolicy
from blockwfc.utils import compose_height_map, load_catalog, parse_catalog


def test_parse_catalog_with_comments_and_rotations() -> None:
    """Comments and blank lines are skipped; rotation tokens are parsed."""
    catalog = parse_catalog(
        [
            "# header",
            "",
            "flat 555555555",
            "ramp 555335115 z90  # trailing comment",
            "ramp 555335115 Y270",
        ]
    )
    assert [b.key for b in catalog] == ["flat", "ramp_z90", "ramp_y270"]
    assert catalog[2].rotation is not None
    assert catalog[2].rotation.axis is Axis.Y


@pytest.mark.parametrize(
    "line, error",
    [
        ("flat", InvalidIdError),
        ("flat 55555555", InvalidGridError),
        ("flat 555555555 w90", InvalidAxisError),
        ("flat 555555555 zz", InvalidIdError),
        ("fl_at 555555555", InvalidIdError),
    ],
)
def test_parse_catalog_errors_name_the_line(line: str, error: type) -> None:
    """Malformed lines raise with their line number."""
    with pytest.raises(error, match="line 2"):
        parse_catalog(["flat 555555555", line])


def test_sample_catalog_builds_under_policy() -> None:
    """The built-in catalog respects the default height policy."""
    catalog = load_catalog(None)
    assert len(catalog) == 17
    cache = AdjacencyCache.build(catalog, policy=HeightPolicy())
    assert len(cache) == 17


def test_load_catalog_from_file(tmp_path: Path) -> None:
    """Catalog files use the same line format."""
    path = tmp_path / "blocks.txt"
    path.write_text("flat 555555555\nlow 111111111 x180\n", encoding="utf-8")
    assert [b.key for b in load_catalog(path)] == ["flat", "low_x180"]


def test_compose_height_map() -> None:
    """Blocks are stitched at their grid cells; gaps take the fill value."""
    digits = BlockConfiguration("digits", "123456789")
    flat = BlockConfiguration("flat", "555555555")
    height_map = compose_height_map({(0, 0): digits, (1, 1): flat}, rows=2, cols=2)
    assert height_map.shape == (6, 6)
    np.testing.assert_array_equal(height_map[0:3, 0:3], np.arange(1, 10).reshape(3, 3))
    np.testing.assert_array_equal(height_map[3:6, 3:6], np.full((3, 3), 5))
    assert (height_map[0:3, 3:6] == -1).all()


def test_compose_height_map_empty() -> None:
    """An empty placement is all fill."""
    height_map = compose_height_map({}, rows=2, cols=3, fill=0)
    assert height_map.shape == (6, 9)
    assert not height_map.any()


def test_catalog_zero_rotation_repeats_bare_entry() -> None:
    """A z0 catalog entry names the same block as one without rotation."""
    catalog = parse_catalog(["flat 555555555", "flat 555555555 z0"])
    assert catalog[0] == catalog[1]
    assert len(AdjacencyCache.build(catalog)) == 1
