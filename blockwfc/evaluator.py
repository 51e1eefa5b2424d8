"""Evaluation metrics for placement consistency."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Tuple

from .block import BlockConfiguration, Direction
from .cache import AdjacencyCache
from .solver import Position

Conflict = Tuple[Position, Direction, Position]


@dataclass
class EvaluationResult:
    """Container for placement metrics."""

    seam_count: int
    conflict_count: int
    consistency: float


class PlacementEvaluator:
    """Check every seam of a placement against the adjacency cache."""

    def __init__(self, cache: AdjacencyCache) -> None:
        self.cache = cache

    @staticmethod
    def _seams(placed: Mapping[Position, BlockConfiguration]) -> List[Conflict]:
        # East and south only, so each neighboring pair is visited once.
        seams: List[Conflict] = []
        for (x, y) in sorted(placed):
            for direction in (Direction.EAST, Direction.SOUTH):
                dx, dy = direction.offset
                other = (x + dx, y + dy)
                if other in placed:
                    seams.append(((x, y), direction, other))
        return seams

    def find_conflicts(self, placed: Mapping[Position, BlockConfiguration]) -> List[Conflict]:
        """Seams whose blocks may not sit next to each other."""
        return [
            (a, direction, b)
            for a, direction, b in self._seams(placed)
            if not self.cache.lookup(placed[a].key, direction, placed[b].key)
        ]

    def evaluate(self, placed: Mapping[Position, BlockConfiguration]) -> EvaluationResult:
        """Calculate seam and conflict counts for a placement."""
        seam_count = len(self._seams(placed))
        conflict_count = len(self.find_conflicts(placed))
        consistency = 1.0 - conflict_count / seam_count if seam_count else 1.0
        return EvaluationResult(
            seam_count=seam_count,
            conflict_count=conflict_count,
            consistency=consistency,
        )
