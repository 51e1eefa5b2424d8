"""Seeded wave-function-collapse placement over an adjacency cache."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np

from .block import BlockConfiguration
from .cache import AdjacencyCache
from .errors import GenerationError
from .solver import ConstraintSolver, Position
from .utils import set_random_seed

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """Configuration for the placement generator."""

    rows: int
    cols: int
    seed: int = 42
    max_restarts: int = 20
    weights: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError("rows and cols must be positive integers")
        if self.max_restarts < 0:
            raise ValueError("max_restarts must be non-negative")
        negative = {key: w for key, w in self.weights.items() if w < 0}
        if negative:
            raise ValueError(f"weights must be non-negative, got {negative}")


class WaveFunctionCollapse:
    """Fill a rows x cols grid, always collapsing the most constrained cell next.

    Candidate selection is a weighted random draw; a cell left with no valid
    candidate restarts the attempt from the initial placement.
    """

    def __init__(self, cache: AdjacencyCache, config: GeneratorConfig) -> None:
        """Initialize generator with reproducible random generator."""
        self.cache = cache
        self.config = config
        self.solver = ConstraintSolver(cache)
        self.rng = set_random_seed(config.seed)
        self.candidates = cache.blocks
        self.weights = np.array(
            [float(config.weights.get(block.key, 1.0)) for block in self.candidates],
            dtype=np.float64,
        )

    def generate(
        self, initial: Optional[Mapping[Position, BlockConfiguration]] = None
    ) -> Dict[Position, BlockConfiguration]:
        """Return a complete placement extending `initial`, which is left untouched."""
        attempts = self.config.max_restarts + 1
        for attempt in range(1, attempts + 1):
            placed: Dict[Position, BlockConfiguration] = dict(initial or {})
            stuck = self._fill(placed)
            if stuck is None:
                logger.debug("Filled %dx%d grid on attempt %d", self.config.rows, self.config.cols, attempt)
                return placed
            logger.info("No valid block for cell %s on attempt %d/%d; restarting", stuck, attempt, attempts)
        raise GenerationError(
            f"Could not fill {self.config.rows}x{self.config.cols} grid after {attempts} attempts"
        )

    def _fill(self, placed: Dict[Position, BlockConfiguration]) -> Optional[Position]:
        """Collapse cells until the grid is full; return the cell that got stuck, if any."""
        while True:
            best: Optional[Tuple[Position, List[int]]] = None
            for y in range(self.config.rows):
                for x in range(self.config.cols):
                    if (x, y) in placed:
                        continue
                    options = self._options((x, y), placed)
                    if not options:
                        return (x, y)
                    if best is None or len(options) < len(best[1]):
                        best = ((x, y), options)
            if best is None:
                return None
            position, options = best
            placed[position] = self.candidates[self._choose(options)]

    def _options(self, position: Position, placed: Mapping[Position, BlockConfiguration]) -> List[int]:
        return [
            i
            for i, block in enumerate(self.candidates)
            if self.weights[i] > 0 and self.solver.is_valid(position, placed, block)
        ]

    def _choose(self, options: List[int]) -> int:
        w = self.weights[options]
        return int(options[int(self.rng.choice(len(options), p=w / w.sum()))])
