"""Integer lattice point generation for visualization."""

from .generator import generate, generate_request, iter_points, total_points
from .projection import bounding_extent, to_positions
from .types import (
    MAX_POINTS,
    GenerationRequest,
    InvalidArgument,
    LatticePoint,
    PointSet,
    parse_request,
)

__all__ = [
    "MAX_POINTS",
    "LatticePoint",
    "PointSet",
    "GenerationRequest",
    "InvalidArgument",
    "parse_request",
    "generate",
    "generate_request",
    "iter_points",
    "total_points",
    "to_positions",
    "bounding_extent",
]
