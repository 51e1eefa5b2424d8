"""Tests for placement consistency metrics."""

from __future__ import annotations

from blockwfc.block import BlockConfiguration, Direction
from blockwfc.cache import AdjacencyCache
from blockwfc.evaluator import PlacementEvaluator

DIGITS = BlockConfiguration("digits", "123456789")
NINES = BlockConfiguration("nines", "999999999")
FLAT = BlockConfiguration("flat", "555555555")


def test_conflict_is_reported() -> None:
    """A mismatched east seam is counted and located."""
    evaluator = PlacementEvaluator(AdjacencyCache.build([DIGITS, NINES]))
    placed = {(0, 0): DIGITS, (1, 0): NINES}
    assert evaluator.find_conflicts(placed) == [((0, 0), Direction.EAST, (1, 0))]
    result = evaluator.evaluate(placed)
    assert result.seam_count == 1
    assert result.conflict_count == 1
    assert result.consistency == 0.0


def test_matching_grid_is_consistent() -> None:
    """A 2x2 block of flat tiles has four seams and no conflicts."""
    evaluator = PlacementEvaluator(AdjacencyCache.build([FLAT]))
    placed = {(x, y): FLAT for x in range(2) for y in range(2)}
    result = evaluator.evaluate(placed)
    assert result.seam_count == 4
    assert result.conflict_count == 0
    assert result.consistency == 1.0


def test_empty_and_isolated_placements() -> None:
    """Placements without seams are trivially consistent."""
    evaluator = PlacementEvaluator(AdjacencyCache.build([FLAT, NINES]))
    assert evaluator.evaluate({}).consistency == 1.0
    result = evaluator.evaluate({(0, 0): FLAT, (2, 2): NINES})
    assert result.seam_count == 0
    assert result.consistency == 1.0
