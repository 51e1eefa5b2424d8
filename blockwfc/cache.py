"""Precomputed pairwise adjacency for a fixed block catalog."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from .block import BlockConfiguration, Direction
from .errors import CacheMissError, InvalidIdError
from .matcher import EdgeMatcher
from .policy import HeightPolicy

logger = logging.getLogger(__name__)


class AdjacencyCache:
    """Read-only compatibility table addressed by composite block keys.

    ``table[i, j, d]`` is True when block ``j`` may be placed on side ``d`` of
    block ``i``. Build it once per catalog with :meth:`build`; rebuild when the
    catalog changes.
    """

    def __init__(self, blocks: List[BlockConfiguration], table: np.ndarray) -> None:
        n = len(blocks)
        if table.shape != (n, n, len(Direction)):
            raise ValueError(f"Expected table of shape {(n, n, len(Direction))}, got {table.shape}")
        self._blocks = list(blocks)
        self._index: Dict[str, int] = {block.key: i for i, block in enumerate(self._blocks)}
        if len(self._index) != n:
            raise InvalidIdError("Cache blocks must have unique composite keys")
        self._table = table.astype(bool, copy=True)
        self._table.flags.writeable = False

    @classmethod
    def build(
        cls,
        catalog: Iterable[BlockConfiguration],
        matcher: Optional[EdgeMatcher] = None,
        policy: Optional[HeightPolicy] = None,
    ) -> "AdjacencyCache":
        """Evaluate every ordered pair and direction of `catalog`."""
        matcher = matcher if matcher is not None else EdgeMatcher()
        blocks: List[BlockConfiguration] = []
        seen: Dict[str, BlockConfiguration] = {}
        for block in catalog:
            if policy is not None:
                policy.validate(block.heights)
            previous = seen.get(block.key)
            if previous is not None:
                if previous != block:
                    raise InvalidIdError(
                        f"Catalog key {block.key!r} used for different blocks: "
                        f"{previous.heights} and {block.heights}"
                    )
                continue
            seen[block.key] = block
            blocks.append(block)

        table = matcher.build_adjacency_tensor(blocks)
        logger.debug(
            "Built adjacency cache: %d blocks, %d compatible pairs",
            len(blocks),
            int(np.count_nonzero(table)),
        )
        return cls(blocks, table)

    def _position(self, key: str) -> int:
        try:
            return self._index[key]
        except KeyError:
            raise CacheMissError(f"Block key {key!r} is not in the adjacency cache") from None

    def lookup(self, key_a: str, direction: Union[Direction, str], key_b: str) -> bool:
        """Return whether `key_b` may be placed on the `direction` side of `key_a`."""
        i = self._position(key_a)
        j = self._position(key_b)
        return bool(self._table[i, j, Direction.parse(direction)])

    def compatible_keys(self, key: str, direction: Union[Direction, str]) -> List[str]:
        """Keys that may be placed on the `direction` side of `key`, in catalog order."""
        i = self._position(key)
        (indices,) = np.nonzero(self._table[i, :, Direction.parse(direction)])
        return [self._blocks[int(j)].key for j in indices]

    def block(self, key: str) -> BlockConfiguration:
        return self._blocks[self._position(key)]

    @property
    def blocks(self) -> List[BlockConfiguration]:
        return list(self._blocks)

    @property
    def keys(self) -> List[str]:
        return [block.key for block in self._blocks]

    @property
    def table(self) -> np.ndarray:
        """The read-only [i, j, direction] compatibility tensor."""
        return self._table

    def to_mapping(self) -> Dict[str, Dict[Tuple[Direction, str], bool]]:
        """Nested-dict view: key -> (direction, candidate key) -> bool."""
        mapping: Dict[str, Dict[Tuple[Direction, str], bool]] = {}
        for i, block_a in enumerate(self._blocks):
            row: Dict[Tuple[Direction, str], bool] = {}
            for direction in Direction:
                for j, block_b in enumerate(self._blocks):
                    row[(direction, block_b.key)] = bool(self._table[i, j, direction])
            mapping[block_a.key] = row
        return mapping

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return len(self._blocks)
