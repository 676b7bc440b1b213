import itertools

import numpy as np
import pytest

from visual.lattice import (
    MAX_POINTS,
    GenerationRequest,
    InvalidArgument,
    bounding_extent,
    generate,
    generate_request,
    iter_points,
    parse_request,
    to_positions,
    total_points,
)
from visual.lattice.generator import _odometer


def _assert_bounded(points, dimension, sum_limit):
    for point in points:
        assert len(point) == dimension
        assert all(-sum_limit <= c <= sum_limit for c in point)


# Test 1: Full enumeration below the cap
@pytest.mark.parametrize("dimension", [1, 2, 3, 4])
@pytest.mark.parametrize("sum_limit", [0, 1, 2, 3])
def test_generate_full_enumeration(dimension, sum_limit):
    points = generate(dimension, sum_limit)

    assert len(points) == (2 * sum_limit + 1) ** dimension
    assert len(set(points)) == len(points)
    _assert_bounded(points, dimension, sum_limit)


# Test 2: Cube example
def test_generate_three_dimensions():
    points = generate(3, 5)

    assert len(points) == 1331
    assert points[0] == (-5, -5, -5)
    assert points[-1] == (5, 5, 5)


# Test 3: One dimension keeps order
def test_generate_one_dimension():
    assert generate(1, 2) == ((-2,), (-1,), (0,), (1,), (2,))


# Test 4: Zero sum limit is the origin only
def test_generate_zero_sum_limit():
    assert generate(5, 0) == ((0, 0, 0, 0, 0),)


# Test 5: Enumeration above the cap is truncated, not sampled
def test_generate_truncates_to_cap():
    points = generate(6, 5)

    assert len(points) == MAX_POINTS
    assert points[0] == (-5,) * 6
    assert points[1] == (-5, -5, -5, -5, -5, -4)
    _assert_bounded(points, 6, 5)


# Test 6: High dimensions are enumerated lazily
def test_generate_high_dimension_is_lazy():
    points = generate(50, 3)

    assert len(points) == MAX_POINTS
    # 99999 in base 7 is 564354, shifted by -3 per digit
    assert points[-1] == (-3,) * 44 + (2, 3, 1, 0, 2, 1)


# Test 7: Determinism
def test_generate_is_deterministic():
    assert generate(4, 3) == generate(4, 3)


# Test 8: Negative sum limit gives an empty set
def test_generate_negative_sum_limit_is_empty():
    assert generate(3, -1) == ()
    assert total_points(3, -1) == 0


# Test 9: Invalid dimensions and types
@pytest.mark.parametrize(
    "dimension, sum_limit",
    [(0, 5), (-2, 5), (True, 5), (3.0, 5), ("3", 5), (3, 1.5), (3, None)],
)
def test_generate_rejects_invalid_arguments(dimension, sum_limit):
    with pytest.raises(InvalidArgument):
        generate(dimension, sum_limit)


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        generate(0, 1)


# Test 10: iter_points honours a custom limit
def test_iter_points_limit():
    assert list(iter_points(2, 1, limit=4)) == [(-1, -1), (-1, 0), (-1, 1), (0, -1)]
    assert list(iter_points(2, 1, limit=0)) == []

    with pytest.raises(InvalidArgument):
        list(iter_points(2, 1, limit=-1))


# Test 11: total_points reports the untruncated size
def test_total_points():
    assert total_points(3, 5) == 1331
    assert total_points(6, 5) == 11**6
    assert total_points(2, 0) == 1


# Test 12: GenerationRequest validation
def test_generation_request_validation():
    request = GenerationRequest(dimension=2, sum_limit=1)
    assert len(generate_request(request)) == 9
    assert GenerationRequest() == GenerationRequest(dimension=3, sum_limit=5)

    with pytest.raises(InvalidArgument):
        GenerationRequest(dimension=0, sum_limit=1)
    with pytest.raises(InvalidArgument):
        GenerationRequest(dimension=3, sum_limit=-1)
    with pytest.raises(InvalidArgument):
        GenerationRequest(dimension=3, sum_limit=False)


# Test 13: Parsing string parameters
def test_parse_request():
    assert parse_request("4", "2") == GenerationRequest(dimension=4, sum_limit=2)

    with pytest.raises(InvalidArgument):
        parse_request("three", "2")
    with pytest.raises(InvalidArgument):
        parse_request("3", "-2")


# Test 14: Display buffer pads low dimensions
def test_to_positions_pads():
    positions = to_positions(generate(1, 1))

    assert positions.dtype == np.float32
    assert positions.tolist() == [-1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0]


# Test 15: Display buffer drops extra axes
def test_to_positions_truncates():
    positions = to_positions([(1, 2, 3, 4), (-1, -2, -3, -4)])

    assert positions.shape == (6,)
    assert positions.tolist() == [1.0, 2.0, 3.0, -1.0, -2.0, -3.0]


def test_to_positions_keeps_three_dimensions():
    points = generate(3, 2)
    positions = to_positions(points)

    assert positions.shape == (3 * len(points),)
    np.testing.assert_array_equal(positions.reshape(-1, 3), np.array(points, dtype=np.float32))


# Test 16: Empty buffers and extents
def test_empty_positions_and_extent():
    empty = to_positions(())

    assert empty.size == 0
    assert bounding_extent(empty) == 0.0
    assert bounding_extent(to_positions(generate(3, 5))) == 5.0


# Test 17: Wide axes are walked without building the axis
def test_generate_huge_sum_limit_one_dimension():
    points = generate(1, 10**8)

    assert len(points) == MAX_POINTS
    assert points[0] == (-(10**8),)
    assert points[-1] == (-(10**8) + MAX_POINTS - 1,)


def test_generate_huge_sum_limit_three_dimensions():
    s = 10**20
    points = generate(3, s)

    assert len(points) == MAX_POINTS
    assert points[0] == (-s, -s, -s)
    assert points[1] == (-s, -s, -s + 1)
    assert points[-1] == (-s, -s, -s + MAX_POINTS - 1)


def test_total_points_huge_sum_limit():
    assert total_points(1, 10**20) == 2 * 10**20 + 1
    assert total_points(2, 10**20) == (2 * 10**20 + 1) ** 2


# Test 18: Odometer walk matches itertools.product order
@pytest.mark.parametrize("dimension, sum_limit", [(1, 2), (2, 1), (3, 2), (4, 0)])
def test_odometer_matches_product(dimension, sum_limit):
    expected = list(itertools.product(range(-sum_limit, sum_limit + 1), repeat=dimension))

    assert list(_odometer(dimension, sum_limit)) == expected
