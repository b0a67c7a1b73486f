"""Integer vector helpers and index geometry. No engine imports."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """Plain (x, y) integer pair."""

    x: int
    y: int

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def floor_div(self, divisor: int) -> Vector2:
        return Vector2(self.x // divisor, self.y // divisor)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def to_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


ZERO = Vector2(0, 0)


def get_coordinates_from(index: int, resolution: int) -> Vector2:
    """(column, row) of a flat index."""
    return Vector2(index % resolution, index // resolution)


def get_index_from(coordinates: Vector2, resolution: int) -> int:
    return coordinates.y * resolution + coordinates.x


def get_index_distance(from_index: int, to_index: int, row_size: int) -> float:
    """Euclidean distance between two indexes within a matrix."""
    return (get_coordinates_from(to_index, row_size) - get_coordinates_from(from_index, row_size)).magnitude()


def get_row_distance(from_index: int, to_index: int, row_size: int) -> int:
    return abs(to_index // row_size - from_index // row_size)


def get_midpoint_index(from_index: int, to_index: int, row_size: int) -> int:
    """Index of the cell halfway between two indexes (rounded down)."""
    start = get_coordinates_from(from_index, row_size)
    end = get_coordinates_from(to_index, row_size)
    return get_index_from((start + end).floor_div(2), row_size)


def cos_between(v1: Vector2, v2: Vector2) -> float:
    """Cosine similarity of two integer vectors.

    Zero vectors have no direction: two of them are maximally similar (1.0),
    one against a nonzero vector returns -2.0, which lies outside [-1, 1] and
    fails every threshold.
    """
    if v1.is_zero() or v2.is_zero():
        return 1.0 if v1.is_zero() and v2.is_zero() else -2.0

    dot = float(v1.x * v2.x + v1.y * v2.y)
    return dot / (v1.magnitude() * v2.magnitude())


def close_enough(test_value: float, close_to: float, by_margin: float) -> bool:
    """Check if ``test_value`` lies strictly within ``by_margin`` of ``close_to``.

    Non-inclusive: 0.1 is not close enough to 0.0 by a margin of 0.1.
    """
    if test_value == close_to:
        return True

    margin = abs(by_margin)
    return close_to - margin < test_value < close_to + margin
