"""Tests for the flat square grid."""

import numpy as np
import pytest

from glyphsight.utils.grid import Grid


def test_initialize_fills_every_cell():
    grid = Grid.initialize(4, 7)
    assert len(grid) == 16
    assert all(value == 7 for value in grid.data)


def test_new_has_no_cells():
    assert len(Grid.new(5)) == 0


def test_build_rejects_wrong_cell_count():
    with pytest.raises(ValueError):
        Grid.build(3, [1, 2, 3, 4])


def test_transpose_swaps_rows_and_columns():
    grid = Grid.build(3, range(9))
    grid.transpose()
    assert list(grid.data) == [0, 3, 6, 1, 4, 7, 2, 5, 8]


def test_transposed_copy_leaves_original():
    grid = Grid.build(2, [1, 2, 3, 4])
    flipped = grid.transposed_copy()
    assert list(grid.data) == [1, 2, 3, 4]
    assert list(flipped.data) == [1, 3, 2, 4]


def test_normal_copy_is_independent():
    grid = Grid.build(2, [1, 0, 0, 1])
    copy = grid.normal_copy()
    copy[0] = 9
    assert grid[0] == 1
    assert copy == Grid.build(2, [9, 0, 0, 1])


def test_test_index_checks_buffer_only():
    grid = Grid.initialize(3)
    assert grid.test_index(0)
    assert grid.test_index(8)
    assert not grid.test_index(9)
    assert not grid.test_index(-1)


def test_border_index():
    grid = Grid.initialize(4)
    border = {i for i in range(16) if grid.test_border_index(i)}
    assert border == set(range(16)) - {5, 6, 9, 10}
    assert grid.test_border_index(-3)
    assert grid.test_border_index(16)


def test_xat_keeps_cells_missing_from_other():
    a = Grid.build(2, [1, 2, 0, 3])
    b = Grid.build(2, [0, 5, 0, 0])
    result = a.xat(b)
    assert list(result.data) == [1, 0, 0, 1]
    assert result.data.dtype == np.uint32


def test_xat_rejects_different_lengths():
    with pytest.raises(ValueError, match="different length"):
        Grid.initialize(2).xat(Grid.initialize(3))


def test_filled_mask():
    grid = Grid.build(2, [0, 4, 1, 0])
    assert list(grid.filled_mask().data) == [0, 1, 1, 0]


def test_transpose_twice_is_identity():
    grid = Grid.build(4, [3, 0, 1, 2, 0, 5, 0, 1, 7, 0, 0, 4, 1, 1, 0, 9])
    assert grid.transposed_copy().transposed_copy() == grid


def test_xat_with_itself_is_empty():
    grid = Grid.build(3, [0, 2, 1, 1, 0, 3, 4, 4, 0])
    assert grid.xat(grid).count_nonzero() == 0
    assert len(grid.xat(grid)) == 9
