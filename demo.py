"""Demo script for constrained block placement."""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np

from blockwfc.block import BlockConfiguration, generate_rotation_variants
from blockwfc.cache import AdjacencyCache
from blockwfc.errors import BlockError
from blockwfc.evaluator import PlacementEvaluator
from blockwfc.generator import GeneratorConfig, WaveFunctionCollapse
from blockwfc.policy import HeightPolicy
from blockwfc.utils import compose_height_map, load_catalog


def parse_grid(value: str) -> Tuple[int, int]:
    """Parse grid value in format ROWSxCOLS, e.g. 4x6."""
    text = value.strip().lower()
    if "x" not in text:
        raise argparse.ArgumentTypeError("grid must be in format ROWSxCOLS, e.g. 5x5")
    rows_text, cols_text = text.split("x", maxsplit=1)
    try:
        rows = int(rows_text)
        cols = int(cols_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("grid rows/cols must be integers") from exc
    if rows <= 0 or cols <= 0:
        raise argparse.ArgumentTypeError("grid rows/cols must be positive")
    return rows, cols


def expand_variants(catalog: Sequence[BlockConfiguration], axes: str) -> List[BlockConfiguration]:
    """Add rotation variants about `axes` for every unrotated catalog entry."""
    if not axes:
        return list(catalog)
    expanded: List[BlockConfiguration] = []
    for block in catalog:
        if block.rotation is None:
            expanded.extend(generate_rotation_variants(block.id, block.heights, axes=axes))
        else:
            expanded.append(block)
    return expanded


def save_height_map(path: Path, height_map: np.ndarray) -> None:
    """Save height map as a colour-mapped image."""
    import matplotlib.pyplot as plt

    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, height_map, cmap="terrain", vmin=0, vmax=9)


def run_demo(
    catalog_path: Optional[str] = None,
    rows: int = 6,
    cols: int = 6,
    seed: int = 42,
    axes: str = "",
    strict_heights: bool = False,
    max_restarts: int = 20,
    output: Optional[str] = None,
    show: bool = True,
) -> None:
    """Run full pipeline: load catalog, build cache, generate, evaluate, display."""
    catalog = expand_variants(load_catalog(catalog_path), axes)
    policy = HeightPolicy() if strict_heights else None

    start = time.perf_counter()
    cache = AdjacencyCache.build(catalog, policy=policy)
    build_time = time.perf_counter() - start

    generator = WaveFunctionCollapse(
        cache, GeneratorConfig(rows=rows, cols=cols, seed=seed, max_restarts=max_restarts)
    )
    start = time.perf_counter()
    placed = generator.generate()
    generate_time = time.perf_counter() - start

    result = PlacementEvaluator(cache).evaluate(placed)
    height_map = compose_height_map(placed, rows, cols)

    print(f"Catalog: {catalog_path or 'built-in sample'} ({len(cache)} blocks)")
    print(f"Grid size: {rows}x{cols}")
    print(f"Seams checked: {result.seam_count}")
    print(f"Conflicts: {result.conflict_count}")
    print(f"Consistency: {result.consistency:.4f}")
    print(f"Cache build time: {build_time:.4f}s")
    print(f"Generate time: {generate_time:.4f}s")
    print("Placed block keys:")
    for y in range(rows):
        print("  " + " ".join(f"{placed[(x, y)].key:<12}" for x in range(cols)))

    if output is not None:
        output_path = Path(output)
        save_height_map(output_path, height_map)
        print(f"Output image: {output_path.resolve()}")

    if show:
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(1, 1, figsize=(6, 6))
        im = ax.imshow(height_map, cmap="terrain", vmin=0, vmax=9)
        ax.set_title("Generated height map")
        ax.axis("off")
        fig.colorbar(im, ax=ax, fraction=0.046)
        plt.tight_layout()
        plt.show()


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Constrained height-block placement demo")
    parser.add_argument("--catalog", type=str, default=None, help="Optional catalog file path")
    parser.add_argument("--grid", type=parse_grid, default=(6, 6), help="Grid format: ROWSxCOLS")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--axes",
        type=str,
        default="",
        help="Axes to generate rotation variants about for unrotated blocks, e.g. 'z' or 'zy'",
    )
    parser.add_argument(
        "--strict-heights",
        action="store_true",
        help="Reject catalog blocks whose mid-edge heights are not 1, 3 or 5",
    )
    parser.add_argument(
        "--max-restarts", type=int, default=20, help="Restarts after a contradiction (default: 20)"
    )
    parser.add_argument("--output", default=None, help="Optional output path for height map image")
    parser.add_argument("--no-show", action="store_true", help="Do not display the height map")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    rows, cols = args.grid
    try:
        run_demo(
            catalog_path=args.catalog,
            rows=rows,
            cols=cols,
            seed=args.seed,
            axes=args.axes,
            strict_heights=args.strict_heights,
            max_restarts=args.max_restarts,
            output=args.output,
            show=not args.no_show,
        )
    except BlockError as exc:
        raise SystemExit(f"error: {exc}") from exc
