"""Edge-signature transforms for 90 degree rotations about the x, y, and z axes."""

from __future__ import annotations

from typing import Callable, Dict, Union

from .block import Axis, BlockConfiguration, EdgeSet, EdgeSignature, extract_edges


def _rev(edge: EdgeSignature) -> EdgeSignature:
    return edge[::-1]


def _step_z(e: EdgeSet) -> EdgeSet:
    # Yaw: sides cycle clockwise; the two sides that cross the reversed
    # storage convention are flipped.
    return EdgeSet(north=_rev(e.west), east=e.north, south=_rev(e.east), west=e.south)


def _step_y(e: EdgeSet) -> EdgeSet:
    # Pitch: north and south swap; east and west keep their side but flip.
    return EdgeSet(north=_rev(e.south), east=_rev(e.east), south=_rev(e.north), west=_rev(e.west))


def _step_x(e: EdgeSet) -> EdgeSet:
    # Roll: east and west swap; north and south keep their side but flip.
    return EdgeSet(north=_rev(e.north), east=_rev(e.west), south=_rev(e.south), west=_rev(e.east))


_STEPS: Dict[Axis, Callable[[EdgeSet], EdgeSet]] = {
    Axis.X: _step_x,
    Axis.Y: _step_y,
    Axis.Z: _step_z,
}


def rotate_edges(edges: EdgeSet, axis: Union[Axis, str], angle: int) -> EdgeSet:
    """Return the effective edges after rotating `angle` degrees about `axis`.

    The angle is reduced to a count of 90 degree steps with floor division, so
    negative angles rotate the other way round. Zero steps return `edges` itself.
    """
    step = _STEPS[Axis.parse(axis)]
    steps = (int(angle) // 90) % 4
    if steps == 0:
        return edges

    result = edges
    for _ in range(steps):
        result = step(result)
    return result


def get_effective_edges(block: BlockConfiguration) -> EdgeSet:
    """Edges of `block` after applying its configured rotation, if any."""
    base = extract_edges(block.heights, size=block.heights.size)
    rotation = block.rotation
    if rotation is None or rotation.is_identity:
        return base
    return rotate_edges(base, rotation.axis, rotation.angle)
