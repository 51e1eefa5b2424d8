"""Error types raised by block adjacency and placement code."""

from __future__ import annotations


class BlockError(ValueError):
    """Base class for invalid block, rotation, or catalog input."""


class InvalidGridError(BlockError):
    """Height grid has the wrong length or out-of-range values."""


class InvalidAxisError(BlockError):
    """Rotation axis is not one of x, y, z."""


class InvalidAngleError(BlockError):
    """Rotation angle is not a multiple of 90 degrees."""


class InvalidDirectionError(BlockError):
    """Direction is not one of north, east, south, west."""


class InvalidIdError(BlockError):
    """Composite block identifier cannot be encoded or decoded."""


class CacheMissError(BlockError, KeyError):
    """Lookup key was not part of the catalog the cache was built from."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class GenerationError(BlockError):
    """Placement generation could not fill the grid."""
