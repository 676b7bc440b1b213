"""Type definitions for lattice point generation."""

from dataclasses import dataclass

MAX_POINTS = 100_000

LatticePoint = tuple[int, ...]
PointSet = tuple[LatticePoint, ...]


class InvalidArgument(ValueError):
    """Raised for malformed generation input (non-integer, out of range)."""


def _require_int(name: str, value: object) -> int:
    # bool is an int subclass but never a meaningful coordinate bound
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    return value


def check_dimension(dimension: object) -> int:
    dimension = _require_int("dimension", dimension)
    if dimension < 1:
        raise InvalidArgument(f"dimension must be >= 1, got {dimension}")
    return dimension


@dataclass(frozen=True)
class GenerationRequest:
    """Parameters for one lattice enumeration."""

    dimension: int = 3
    sum_limit: int = 5

    def __post_init__(self) -> None:
        check_dimension(self.dimension)
        sum_limit = _require_int("sum_limit", self.sum_limit)
        if sum_limit < 0:
            raise InvalidArgument(f"sum_limit must be >= 0, got {sum_limit}")


def parse_request(dimension: str, sum_limit: str) -> GenerationRequest:
    """Build a request from string values (query strings, form fields)."""
    try:
        d = int(dimension)
        s = int(sum_limit)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Expected integers, got dimension={dimension!r} sumLimit={sum_limit!r}") from e
    return GenerationRequest(dimension=d, sum_limit=s)
