"""Optional height-domain rules for block grids and constrained height stepping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .block import HeightGrid
from .errors import InvalidGridError


def is_edge_position(index: int, size: int = 3) -> bool:
    """True for mid-edge cells: on the border but not a corner."""
    row, col = divmod(index, size)
    last = size - 1
    on_border = row in (0, last) or col in (0, last)
    is_corner = row in (0, last) and col in (0, last)
    return on_border and not is_corner


def _cell_name(index: int, size: int) -> str:
    row, col = divmod(index, size)
    last = size - 1
    if row == 0 and col not in (0, last):
        return "top edge"
    if row == last and col not in (0, last):
        return "bottom edge"
    if col == 0 and row not in (0, last):
        return "left edge"
    if col == last and row not in (0, last):
        return "right edge"
    if row in (0, last) and col in (0, last):
        return "corner"
    return "center"


@dataclass(frozen=True)
class HeightPolicy:
    """Mid-edge cells take heights from `edge_heights`; other cells lie in [min, max]."""

    edge_heights: Tuple[int, ...] = (1, 3, 5)
    min_height: int = 0
    max_height: int = 5

    def __post_init__(self) -> None:
        if not self.edge_heights:
            raise ValueError("edge_heights must not be empty")
        if self.min_height > self.max_height:
            raise ValueError("min_height must not exceed max_height")
        object.__setattr__(self, "edge_heights", tuple(sorted(set(self.edge_heights))))

    def allows(self, index: int, height: int, size: int = 3) -> bool:
        if is_edge_position(index, size):
            return height in self.edge_heights
        return self.min_height <= height <= self.max_height

    def violations(self, grid: HeightGrid) -> List[str]:
        """Describe every cell of `grid` that breaks the policy."""
        problems: List[str] = []
        for index, height in enumerate(grid):
            if self.allows(index, height, grid.size):
                continue
            name = _cell_name(index, grid.size)
            if is_edge_position(index, grid.size):
                allowed = ", ".join(str(h) for h in self.edge_heights)
            else:
                allowed = f"{self.min_height}-{self.max_height}"
            problems.append(
                f"{name} (position {index + 1}): height {height} invalid (must be {allowed})"
            )
        return problems

    def validate(self, grid: HeightGrid) -> None:
        problems = self.violations(grid)
        if problems:
            raise InvalidGridError(f"Grid {grid} violates height policy: " + "; ".join(problems))

    def next_height(self, grid: HeightGrid, index: int, step: int) -> Optional[int]:
        """Height cell `index` moves to when raised (step > 0) or lowered (step < 0).

        Returns None when the cell is already at the limit in that direction.
        """
        if step == 0:
            raise ValueError("step must be non-zero")
        if not 0 <= index < len(grid):
            raise IndexError(f"Cell index {index} out of range for {grid.size}x{grid.size} grid")
        current = grid[index]

        if is_edge_position(index, grid.size):
            allowed = self.edge_heights
            if step > 0:
                candidates = [h for h in allowed if h > current]
                nearest = candidates[0] if candidates else None
            else:
                candidates = [h for h in allowed if h < current]
                nearest = candidates[-1] if candidates else None
            if nearest is None and current not in allowed:
                # Out-of-domain edge with nothing further that way: snap to the bound.
                return allowed[0] if current < allowed[0] else allowed[-1]
            return nearest

        # Out-of-range cells may only move back toward the range, one step at a time.
        if step > 0:
            return None if current >= self.max_height else current + 1
        return None if current <= self.min_height else current - 1

    def sculpt(self, grid: HeightGrid, index: int, step: int) -> Optional[HeightGrid]:
        """Return a new grid with one cell stepped, or None if it cannot move."""
        target = self.next_height(grid, index, step)
        if target is None:
            return None
        return grid.replace(index, target)
