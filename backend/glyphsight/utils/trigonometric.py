"""Compass directions on a row-major grid, named after trigonometric functions.

The order follows differentiation: (cos)' = -sin, (-sin)' = -cos, (-cos)' = sin,
(sin)' = cos. Taking the derivative of a direction is therefore a 90 degree
rotation, and the antiderivative rotates back.
"""

from __future__ import annotations

import enum


class Trigonometric(enum.Enum):
    COS = 0   # east, index + 1
    NSIN = 1  # north, index + row_size
    NCOS = 2  # west, index - 1
    SIN = 3   # south, index - row_size

    @classmethod
    def from_int(cls, value: int) -> Trigonometric:
        """Direction for 0, 1, 2 or 3. Raises ValueError for anything else."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Value passed couldn't be converted. Values must be in range [0, 3]. Your value was {value}"
            ) from None

    def derivative(self) -> Trigonometric:
        return _DERIVATIVES[self]

    def antiderivative(self) -> Trigonometric:
        return _ANTIDERIVATIVES[self]

    def move(self, row_size: int) -> int:
        """Flat-index offset of one step in this direction."""
        if self is Trigonometric.COS:
            return 1
        if self is Trigonometric.NCOS:
            return -1
        if self is Trigonometric.NSIN:
            return row_size
        return -row_size


_DERIVATIVES: dict[Trigonometric, Trigonometric] = {
    Trigonometric.COS: Trigonometric.NSIN,
    Trigonometric.NSIN: Trigonometric.NCOS,
    Trigonometric.NCOS: Trigonometric.SIN,
    Trigonometric.SIN: Trigonometric.COS,
}

_ANTIDERIVATIVES: dict[Trigonometric, Trigonometric] = {
    after: before for before, after in _DERIVATIVES.items()
}


def get_index_from_direction(
    starting_point: int,
    row_size: int,
    direction: Trigonometric,
    offset45: int = 0,
) -> int:
    """Index reached by one step from ``starting_point``.

    A negative ``offset45`` adds a step towards the derivative of ``direction``
    and a positive one towards its antiderivative, giving the diagonal moves.

    No bounds checking is done: callers validate the result before reading
    the cell.
    """
    result = starting_point + direction.move(row_size)

    if offset45 < 0:
        result += direction.derivative().move(row_size)
    elif offset45 > 0:
        result += direction.antiderivative().move(row_size)

    return result
