"""Height-grid block adjacency and constrained placement package."""

from .block import (
    Axis,
    BlockConfiguration,
    Direction,
    EdgeSet,
    HeightGrid,
    Rotation,
    extract_edges,
    generate_rotation_variants,
    get_rotated_block_id,
    parse_rotated_block_id,
)
from .cache import AdjacencyCache
from .errors import (
    BlockError,
    CacheMissError,
    GenerationError,
    InvalidAngleError,
    InvalidAxisError,
    InvalidDirectionError,
    InvalidGridError,
    InvalidIdError,
)
from .evaluator import EvaluationResult, PlacementEvaluator
from .generator import GeneratorConfig, WaveFunctionCollapse
from .matcher import EdgeMatcher, can_be_adjacent, find_valid_adjacents
from .policy import HeightPolicy, is_edge_position
from .rotation import get_effective_edges, rotate_edges
from .solver import ConstraintSolver

__all__ = [
    "Axis",
    "BlockConfiguration",
    "Direction",
    "EdgeSet",
    "HeightGrid",
    "Rotation",
    "extract_edges",
    "generate_rotation_variants",
    "get_rotated_block_id",
    "parse_rotated_block_id",
    "rotate_edges",
    "get_effective_edges",
    "EdgeMatcher",
    "can_be_adjacent",
    "find_valid_adjacents",
    "AdjacencyCache",
    "ConstraintSolver",
    "HeightPolicy",
    "is_edge_position",
    "GeneratorConfig",
    "WaveFunctionCollapse",
    "EvaluationResult",
    "PlacementEvaluator",
    "BlockError",
    "InvalidGridError",
    "InvalidAxisError",
    "InvalidAngleError",
    "InvalidDirectionError",
    "InvalidIdError",
    "CacheMissError",
    "GenerationError",
]
