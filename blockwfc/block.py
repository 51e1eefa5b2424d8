"""Block configurations, height grids, and directional edge extraction."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import (
    InvalidAngleError,
    InvalidAxisError,
    InvalidDirectionError,
    InvalidGridError,
    InvalidIdError,
)

ROTATION_SEPARATOR = "_"

EdgeSignature = Tuple[int, ...]


class Direction(IntEnum):
    """Cardinal directions; also used as the last axis of adjacency tensors."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def opposite(self) -> "Direction":
        return Direction((self.value + 2) % 4)

    @property
    def offset(self) -> Tuple[int, int]:
        """(dx, dy) step toward this side; y grows southwards."""
        return _OFFSETS[self]

    @classmethod
    def parse(cls, value: Union[str, int, "Direction"]) -> "Direction":
        """Accept a Direction, its index, or a name such as "north"."""
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidDirectionError(f"Unsupported direction: {value!r}") from None
        try:
            return cls(value)
        except ValueError:
            raise InvalidDirectionError(f"Unsupported direction: {value!r}") from None


_OFFSETS = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


class Axis(str, Enum):
    """Principal rotation axes."""

    X = "x"
    Y = "y"
    Z = "z"

    @classmethod
    def parse(cls, value: Union[str, "Axis"]) -> "Axis":
        if isinstance(value, Axis):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidAxisError(f"Unsupported rotation axis: {value!r}") from None


@dataclass(frozen=True)
class Rotation:
    """Rotation about one axis by a multiple of 90 degrees, normalized to [0, 360)."""

    axis: Axis
    angle: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "axis", Axis.parse(self.axis))
        angle = int(self.angle)
        if angle != self.angle or angle % 90 != 0:
            raise InvalidAngleError(f"Rotation angle must be a multiple of 90, got {self.angle}")
        object.__setattr__(self, "angle", angle % 360)

    @property
    def steps(self) -> int:
        """Number of elementary 90 degree steps."""
        return self.angle // 90

    @property
    def is_identity(self) -> bool:
        return self.angle == 0

    def __str__(self) -> str:
        return f"{self.axis.value}{self.angle}"


class HeightGrid(Sequence[int]):
    """Immutable N x N grid of single-digit heights stored row-major."""

    __slots__ = ("_values", "_size")

    def __init__(self, values: Iterable[int], size: int = 3) -> None:
        try:
            vals = tuple(int(v) for v in values)
        except (TypeError, ValueError) as exc:
            raise InvalidGridError(f"Height grid values must be integers: {exc}") from exc
        if size <= 0 or len(vals) != size * size:
            raise InvalidGridError(
                f"Height grid must contain exactly {size * size} values, got {len(vals)}"
            )
        bad = [v for v in vals if not 0 <= v <= 9]
        if bad:
            raise InvalidGridError(f"Height values must be single digits 0-9, got {bad}")
        self._values = vals
        self._size = size

    @classmethod
    def parse(cls, text: str) -> "HeightGrid":
        """Parse a serialized digit string such as "555335135"; size is inferred."""
        text = str(text).strip()
        if not text or not text.isdigit():
            raise InvalidGridError(f"Height string must contain only digits, got {text!r}")
        size = math.isqrt(len(text))
        if size * size != len(text):
            raise InvalidGridError(f"Height string length {len(text)} is not a square number")
        return cls((int(ch) for ch in text), size=size)

    @property
    def size(self) -> int:
        return self._size

    def __getitem__(self, index):  # type: ignore[override]
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeightGrid):
            return self._size == other._size and self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._size, self._values))

    def __str__(self) -> str:
        return "".join(str(v) for v in self._values)

    def __repr__(self) -> str:
        return f"HeightGrid({str(self)!r})"

    def to_array(self) -> np.ndarray:
        """Return a fresh (size, size) integer array of heights."""
        return np.array(self._values, dtype=np.int32).reshape(self._size, self._size)

    def replace(self, index: int, height: int) -> "HeightGrid":
        """Return a copy with one cell changed."""
        values = list(self._values)
        values[index] = height
        return HeightGrid(values, size=self._size)


@dataclass(frozen=True)
class EdgeSet:
    """Four directional edge signatures of a block.

    South and west are stored reversed so that an edge compares equal to the
    opposite edge of its neighbor when their shared boundary matches.
    """

    north: EdgeSignature
    east: EdgeSignature
    south: EdgeSignature
    west: EdgeSignature

    def __getitem__(self, direction: Union[Direction, str, int]) -> EdgeSignature:
        side = Direction.parse(direction)
        return (self.north, self.east, self.south, self.west)[side]


def extract_edges(grid: Union[HeightGrid, str, Sequence[int]], size: int = 3) -> EdgeSet:
    """Derive north/east/south/west edge signatures from a row-major height grid."""
    if isinstance(grid, str):
        grid = HeightGrid.parse(grid)
    if not isinstance(grid, HeightGrid):
        grid = HeightGrid(grid, size=size)
    elif grid.size != size:
        raise InvalidGridError(f"Expected a {size}x{size} grid, got {grid.size}x{grid.size}")

    h = grid.to_array()
    return EdgeSet(
        north=tuple(int(v) for v in h[0, :]),
        east=tuple(int(v) for v in h[:, -1]),
        south=tuple(int(v) for v in h[-1, ::-1]),
        west=tuple(int(v) for v in h[::-1, 0]),
    )


def get_rotated_block_id(base_id: str, rotation: Optional[Rotation] = None) -> str:
    """Encode a composite key: bare id, or "<id>_<axis><angle>" for non-zero rotations."""
    if not base_id or ROTATION_SEPARATOR in base_id:
        raise InvalidIdError(
            f"Block id must be non-empty and must not contain {ROTATION_SEPARATOR!r}: {base_id!r}"
        )
    if rotation is None or rotation.is_identity:
        return base_id
    return f"{base_id}{ROTATION_SEPARATOR}{rotation}"


def parse_rotated_block_id(rotated_id: str) -> Tuple[str, Optional[Rotation]]:
    """Decode a composite key back into its base id and rotation."""
    parts = rotated_id.split(ROTATION_SEPARATOR)
    if len(parts) == 1:
        if not parts[0]:
            raise InvalidIdError("Block id must be non-empty")
        return parts[0], None
    if len(parts) > 2:
        raise InvalidIdError(f"Block id has more than one {ROTATION_SEPARATOR!r}: {rotated_id!r}")

    base_id, suffix = parts
    if not base_id or len(suffix) < 2:
        raise InvalidIdError(f"Malformed rotated block id: {rotated_id!r}")
    angle_text = suffix[1:]
    if not angle_text.isdigit():
        raise InvalidIdError(f"Non-numeric rotation angle in {rotated_id!r}")
    try:
        rotation = Rotation(suffix[0], int(angle_text))
    except (InvalidAxisError, InvalidAngleError) as exc:
        raise InvalidIdError(f"Malformed rotated block id {rotated_id!r}: {exc}") from exc
    return base_id, rotation


@dataclass(frozen=True)
class BlockConfiguration:
    """A placeable block: identifier, height grid, and optional rotation."""

    id: str
    heights: HeightGrid
    rotation: Optional[Rotation] = None

    def __post_init__(self) -> None:
        if not isinstance(self.heights, HeightGrid):
            heights = self.heights
            object.__setattr__(
                self,
                "heights",
                HeightGrid.parse(heights) if isinstance(heights, str) else HeightGrid(heights),
            )
        # Zero-angle rotations share the bare key and edges of the unrotated block.
        if self.rotation is not None and self.rotation.is_identity:
            object.__setattr__(self, "rotation", None)
        # Validates the id as a side effect.
        get_rotated_block_id(self.id)

    @property
    def key(self) -> str:
        """Composite key distinguishing rotation variants."""
        return get_rotated_block_id(self.id, self.rotation)

    def rotated(self, axis: Union[Axis, str], angle: int) -> "BlockConfiguration":
        return BlockConfiguration(self.id, self.heights, Rotation(axis, angle))


def generate_rotation_variants(
    block_id: str,
    heights: Union[HeightGrid, str],
    axes: Iterable[Union[Axis, str]] = ("z",),
) -> List[BlockConfiguration]:
    """Return the unrotated block followed by its 90/180/270 variants per axis."""
    base = BlockConfiguration(block_id, heights)
    variants = [base]
    for axis in axes:
        for angle in (90, 180, 270):
            variants.append(base.rotated(axis, angle))
    return variants
