"""Utility helpers for reproducible placement experiments."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np

from .block import BlockConfiguration, HeightGrid, Rotation
from .errors import BlockError, InvalidIdError

SAMPLE_CATALOG = """\
# id     heights    [rotation]
# Edges are either 555 (high) or 535 (notched); together these cover
# every high/notched pattern around a block.
flat     555555555
mound    555545555
cross    535333535
bridge   555333535
bridge   555333535  z90
bridge   555333535  z180
bridge   555333535  z270
corner   555335535
corner   555335535  z90
corner   555335535  z180
corner   555335535  z270
channel  555333555
channel  555333555  z90
tee      555335555
tee      555335555  z90
tee      555335555  z180
tee      555335555  z270
"""


def set_random_seed(seed: int = 42) -> np.random.Generator:
    """Create a deterministic numpy random generator."""
    return np.random.default_rng(seed)


def parse_rotation(text: str) -> Rotation:
    """Parse a rotation token such as "z90" or "y270"."""
    text = text.strip().lower()
    if len(text) < 2 or not text[1:].lstrip("-").isdigit():
        raise InvalidIdError(f"Rotation must look like <axis><angle>, e.g. z90; got {text!r}")
    return Rotation(text[0], int(text[1:]))


def parse_catalog(lines: Iterable[str]) -> List[BlockConfiguration]:
    """Parse catalog lines of the form ``<id> <heights> [<axis><angle>]``."""
    catalog: List[BlockConfiguration] = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        fields = line.split()
        try:
            if len(fields) not in (2, 3):
                raise InvalidIdError(f"expected 2 or 3 fields, got {len(fields)}")
            rotation = parse_rotation(fields[2]) if len(fields) == 3 else None
            catalog.append(BlockConfiguration(fields[0], HeightGrid.parse(fields[1]), rotation))
        except BlockError as exc:
            raise type(exc)(f"line {lineno}: {exc}") from exc
    return catalog


def load_catalog(path: Optional[Union[str, Path]]) -> List[BlockConfiguration]:
    """Load a catalog file, or the built-in sample catalog when `path` is None."""
    if path is None:
        return parse_catalog(SAMPLE_CATALOG.splitlines())
    with open(path, "r", encoding="utf-8") as handle:
        return parse_catalog(handle)


def compose_height_map(
    placed: Mapping[Tuple[int, int], BlockConfiguration],
    rows: int,
    cols: int,
    fill: int = -1,
    size: int = 3,
) -> np.ndarray:
    """Stitch placed block grids into one height map; empty cells get `fill`."""
    if placed:
        size = next(iter(placed.values())).heights.size
    canvas = np.full((rows * size, cols * size), fill, dtype=np.int32)
    for (x, y), block in placed.items():
        if not (0 <= x < cols and 0 <= y < rows):
            continue
        y0 = y * size
        x0 = x * size
        # Rotation only changes how edges match, not the stored grid.
        canvas[y0 : y0 + size, x0 : x0 + size] = block.heights.to_array()
    return canvas
