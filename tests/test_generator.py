"""Generation integration tests."""

from __future__ import annotations

import pytest

from blockwfc.block import BlockConfiguration
from blockwfc.cache import AdjacencyCache
from blockwfc.errors import GenerationError
from blockwfc.evaluator import PlacementEvaluator
from blockwfc.generator import GeneratorConfig, WaveFunctionCollapse
from blockwfc.policy import HeightPolicy
from blockwfc.utils import load_catalog


def _run_case(rows: int, cols: int, seed: int = 42) -> dict:
    cache = AdjacencyCache.build(load_catalog(None), policy=HeightPolicy())
    generator = WaveFunctionCollapse(cache, GeneratorConfig(rows=rows, cols=cols, seed=seed))
    placed = generator.generate()
    result = PlacementEvaluator(cache).evaluate(placed)
    assert result.conflict_count == 0
    return placed


def test_generate_fills_grid_without_conflicts() -> None:
    """Every cell is filled and every seam matches."""
    placed = _run_case(5, 7)
    assert set(placed) == {(x, y) for x in range(7) for y in range(5)}


def test_generate_is_deterministic_for_seed() -> None:
    """The same seed reproduces the same placement."""
    first = _run_case(4, 4, seed=7)
    second = _run_case(4, 4, seed=7)
    assert {p: b.key for p, b in first.items()} == {p: b.key for p, b in second.items()}


def test_initial_placement_is_kept_and_not_mutated() -> None:
    """Pre-placed blocks stay where they are; the caller's dict is untouched."""
    cache = AdjacencyCache.build(load_catalog(None))
    cross = cache.block("cross")
    initial = {(1, 1): cross}
    placed = WaveFunctionCollapse(cache, GeneratorConfig(rows=3, cols=3)).generate(initial)
    assert placed[(1, 1)] is cross
    assert len(placed) == 9
    assert initial == {(1, 1): cross}


def test_zero_weight_blocks_are_never_chosen() -> None:
    """Weights steer the draw; zero removes a block entirely."""
    flat = BlockConfiguration("flat", "555555555")
    mound = BlockConfiguration("mound", "555545555")
    cache = AdjacencyCache.build([flat, mound])
    config = GeneratorConfig(rows=3, cols=3, weights={"mound": 0.0})
    placed = WaveFunctionCollapse(cache, config).generate()
    assert {b.key for b in placed.values()} == {"flat"}


def test_unsatisfiable_catalog_raises() -> None:
    """A block that cannot sit beside itself cannot fill a 1x2 grid."""
    cache = AdjacencyCache.build([BlockConfiguration("digits", "123456789")])
    generator = WaveFunctionCollapse(cache, GeneratorConfig(rows=1, cols=2, max_restarts=2))
    with pytest.raises(GenerationError):
        generator.generate()


@pytest.mark.parametrize(
    "kwargs",
    [{"rows": 0, "cols": 3}, {"rows": 3, "cols": 3, "max_restarts": -1}, {"rows": 2, "cols": 2, "weights": {"flat": -1.0}}],
)
def test_invalid_config_raises(kwargs: dict) -> None:
    """Config values are checked on construction."""
    with pytest.raises(ValueError):
        GeneratorConfig(**kwargs)
