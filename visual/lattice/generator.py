"""Integer lattice point enumeration."""

from __future__ import annotations

import itertools
from collections.abc import Iterator

from .types import (
    MAX_POINTS,
    GenerationRequest,
    InvalidArgument,
    LatticePoint,
    PointSet,
    _require_int,
    check_dimension,
)


def _axis_size(sum_limit: int) -> int:
    return max(2 * sum_limit + 1, 0)


def _odometer(dimension: int, sum_limit: int) -> Iterator[LatticePoint]:
    # last axis turns fastest, same order as itertools.product
    point = [-sum_limit] * dimension
    while True:
        yield tuple(point)
        axis = dimension - 1
        while axis >= 0 and point[axis] == sum_limit:
            point[axis] = -sum_limit
            axis -= 1
        if axis < 0:
            return
        point[axis] += 1


def iter_points(dimension: int, sum_limit: int, limit: int = MAX_POINTS) -> Iterator[LatticePoint]:
    """
    Lazily enumerate lattice points in lexicographic order.

    Every point has ``dimension`` coordinates in ``[-sum_limit, sum_limit]``.
    At most ``limit`` points are produced and neither the product nor a
    wide axis is ever materialized, so huge dimensions and sum limits stay
    cheap. A negative ``sum_limit`` gives an empty axis and no points.

    Raises:
        InvalidArgument: If dimension < 1, limit < 0, or an argument is not an int
    """
    check_dimension(dimension)
    _require_int("sum_limit", sum_limit)
    limit = _require_int("limit", limit)
    if limit < 0:
        raise InvalidArgument(f"limit must be >= 0, got {limit}")
    if sum_limit < 0:
        return iter(())
    if _axis_size(sum_limit) <= MAX_POINTS:
        points = itertools.product(range(-sum_limit, sum_limit + 1), repeat=dimension)
    else:
        points = _odometer(dimension, sum_limit)
    return itertools.islice(points, limit)


def generate(dimension: int, sum_limit: int) -> PointSet:
    """Enumerate up to MAX_POINTS lattice points as an immutable point set."""
    return tuple(iter_points(dimension, sum_limit))


def generate_request(request: GenerationRequest) -> PointSet:
    return generate(request.dimension, request.sum_limit)


def total_points(dimension: int, sum_limit: int) -> int:
    """Size of the full enumeration before truncation."""
    check_dimension(dimension)
    _require_int("sum_limit", sum_limit)
    return _axis_size(sum_limit) ** dimension
