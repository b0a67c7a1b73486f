"""Tests for the trigonometric direction model."""

import pytest

from glyphsight.utils.trigonometric import Trigonometric, get_index_from_direction


def test_from_int_round_trip():
    for value in range(4):
        assert Trigonometric.from_int(value).value == value


@pytest.mark.parametrize("value", [-1, 4, 17])
def test_from_int_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        Trigonometric.from_int(value)


def test_derivative_cycles_through_all_directions():
    direction = Trigonometric.COS
    seen = []
    for _ in range(4):
        seen.append(direction)
        direction = direction.derivative()
    assert direction is Trigonometric.COS
    assert seen == [Trigonometric.COS, Trigonometric.NSIN, Trigonometric.NCOS, Trigonometric.SIN]


def test_antiderivative_undoes_derivative():
    for direction in Trigonometric:
        assert direction.derivative().antiderivative() is direction


def test_straight_moves():
    assert get_index_from_direction(12, 5, Trigonometric.COS) == 13
    assert get_index_from_direction(12, 5, Trigonometric.NCOS) == 11
    assert get_index_from_direction(12, 5, Trigonometric.NSIN) == 17
    assert get_index_from_direction(12, 5, Trigonometric.SIN) == 7


def test_diagonal_moves():
    # negative offset turns towards the derivative, positive towards the antiderivative
    assert get_index_from_direction(12, 5, Trigonometric.COS, -1) == 18
    assert get_index_from_direction(12, 5, Trigonometric.COS, 1) == 8
    assert get_index_from_direction(12, 5, Trigonometric.NCOS, -1) == 6


@pytest.mark.parametrize("index", [65, 130, 2079, 4030])
def test_east_then_west_returns_home(index):
    east = get_index_from_direction(index, 64, Trigonometric.COS)
    assert get_index_from_direction(east, 64, Trigonometric.NCOS) == index
