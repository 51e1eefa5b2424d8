"""Edge matching and pairwise adjacency tensor computation."""

from __future__ import annotations

from typing import List, Sequence, Union

import numpy as np

from .block import BlockConfiguration, Direction, EdgeSet, EdgeSignature
from .rotation import get_effective_edges


class EdgeMatcher:
    """Decide whether two (possibly rotated) blocks may sit side by side."""

    @staticmethod
    def edges_match(edge_a: EdgeSignature, edge_b: EdgeSignature) -> bool:
        """Plain element-wise equality of two edge signatures."""
        return len(edge_a) == len(edge_b) and all(a == b for a, b in zip(edge_a, edge_b))

    def _match_edge_sets(self, edges_a: EdgeSet, edges_b: EdgeSet, direction: Direction) -> bool:
        return self.edges_match(edges_a[direction], edges_b[direction.opposite])

    def can_be_adjacent(
        self,
        block_a: BlockConfiguration,
        block_b: BlockConfiguration,
        direction: Union[Direction, str],
    ) -> bool:
        """Return True if `block_b` may be placed on the `direction` side of `block_a`."""
        side = Direction.parse(direction)
        return self._match_edge_sets(get_effective_edges(block_a), get_effective_edges(block_b), side)

    def find_valid_adjacents(
        self,
        source: BlockConfiguration,
        direction: Union[Direction, str],
        candidates: Sequence[BlockConfiguration],
    ) -> List[BlockConfiguration]:
        """Filter `candidates` to those that fit on `direction` of `source`, keeping order."""
        side = Direction.parse(direction)
        source_edges = get_effective_edges(source)
        return [
            block
            for block in candidates
            if self._match_edge_sets(source_edges, get_effective_edges(block), side)
        ]

    def build_adjacency_tensor(self, blocks: Sequence[BlockConfiguration]) -> np.ndarray:
        """Build full pairwise directional compatibility tensor: [i, j, direction]."""
        n = len(blocks)
        edges = [get_effective_edges(block) for block in blocks]
        table = np.zeros((n, n, len(Direction)), dtype=bool)
        for i in range(n):
            for j in range(n):
                for direction in Direction:
                    table[i, j, direction] = self._match_edge_sets(edges[i], edges[j], direction)
        return table


_DEFAULT_MATCHER = EdgeMatcher()


def can_be_adjacent(
    block_a: BlockConfiguration,
    block_b: BlockConfiguration,
    direction: Union[Direction, str],
) -> bool:
    """Module-level shortcut for :meth:`EdgeMatcher.can_be_adjacent`."""
    return _DEFAULT_MATCHER.can_be_adjacent(block_a, block_b, direction)


def find_valid_adjacents(
    source: BlockConfiguration,
    direction: Union[Direction, str],
    candidates: Sequence[BlockConfiguration],
) -> List[BlockConfiguration]:
    """Module-level shortcut for :meth:`EdgeMatcher.find_valid_adjacents`."""
    return _DEFAULT_MATCHER.find_valid_adjacents(source, direction, candidates)
