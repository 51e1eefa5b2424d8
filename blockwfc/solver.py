"""Constraint queries over a partially filled placement grid."""

from __future__ import annotations

from typing import List, Mapping, Sequence, Tuple

from .block import BlockConfiguration, Direction
from .cache import AdjacencyCache

Position = Tuple[int, int]
PlacementGrid = Mapping[Position, BlockConfiguration]


class ConstraintSolver:
    """Filter candidate blocks against already-placed cardinal neighbors."""

    def __init__(self, cache: AdjacencyCache) -> None:
        self.cache = cache

    @staticmethod
    def neighbors(position: Position, placed: PlacementGrid) -> List[Tuple[Direction, BlockConfiguration]]:
        """Placed blocks around `position`, tagged with the side they sit on."""
        x, y = position
        found: List[Tuple[Direction, BlockConfiguration]] = []
        for direction in Direction:
            dx, dy = direction.offset
            block = placed.get((x + dx, y + dy))
            if block is not None:
                found.append((direction, block))
        return found

    def is_valid(self, position: Position, placed: PlacementGrid, candidate: BlockConfiguration) -> bool:
        """True if `candidate` fits every placed neighbor of `position`."""
        return self._fits(self.neighbors(position, placed), candidate)

    def _fits(
        self, neighbors: List[Tuple[Direction, BlockConfiguration]], candidate: BlockConfiguration
    ) -> bool:
        # A neighbor on side d of the position sees the candidate on its d.opposite side.
        return all(
            self.cache.lookup(neighbor.key, direction.opposite, candidate.key)
            for direction, neighbor in neighbors
        )

    def get_valid_blocks(
        self,
        position: Position,
        placed: PlacementGrid,
        candidates: Sequence[BlockConfiguration],
    ) -> List[BlockConfiguration]:
        """Return candidates compatible with all placed neighbors, in input order."""
        neighbors = self.neighbors(position, placed)
        if not neighbors:
            return list(candidates)
        return [block for block in candidates if self._fits(neighbors, block)]
