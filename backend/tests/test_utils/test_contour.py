"""Tests for the closed curve tracer."""

import numpy as np
import pytest

from glyphsight.utils.contour import (
    CLOSING_VALUE,
    CURVE_VALUE,
    HOLLOW_VALUE,
    CurveTraceError,
    CurveWalk,
    GlobalCurveData,
    get_curves,
    mark_curve_points,
)
from glyphsight.utils.grid import Grid
from glyphsight.utils.trigonometric import Trigonometric

BLOCK = [6, 7, 8, 11, 12, 13, 16, 17, 18]


def _grid(size: int, filled: list[int]) -> Grid:
    data = np.zeros(size * size, dtype=np.uint32)
    data[filled] = 1
    return Grid.build(size, data)


def test_get_curves_outlines_and_hollows_block():
    outline = get_curves(GlobalCurveData(5), _grid(5, BLOCK))
    assert outline[12] == HOLLOW_VALUE
    assert all(outline[i] == CURVE_VALUE for i in BLOCK if i != 12)
    assert outline.count_nonzero() == 9


def test_get_curves_ring():
    ring = [i for i in BLOCK if i != 12]
    outline = get_curves(GlobalCurveData(5), _grid(5, ring))
    assert all(outline[i] == CURVE_VALUE for i in ring)
    assert outline[12] == 0


def test_mark_curve_points_orders_block_outline():
    data = GlobalCurveData(5)
    outline = get_curves(data, _grid(5, BLOCK))
    marked, summaries = mark_curve_points(data, outline)

    order = {6: 1, 7: 2, 8: 3, 13: 4, 18: 5, 17: 6, 16: 7, 11: 8}
    for index, position in order.items():
        assert data.curves_global_orderd[index] == position
        assert data.curves_global_output[index] == 1

    assert len(summaries) == 1
    summary = summaries[0]
    assert summary.number == 1
    assert summary.start == 6
    assert summary.closing == 18
    assert summary.midpoint == 12
    assert summary.point_count == 8
    assert marked[18] == CLOSING_VALUE
    assert data.global_output_number == 2


def test_straight_run_is_flattened_unless_dominant():
    data = GlobalCurveData(5)
    outline = get_curves(data, _grid(5, [6, 7, 8]))
    assert [outline[i] for i in (6, 7, 8)] == [CURVE_VALUE] * 3

    marked, summaries = mark_curve_points(data, outline)
    assert [marked[i] for i in (6, 7, 8)] == [HOLLOW_VALUE] * 3
    assert summaries[0].closing == 8

    dominant_data = GlobalCurveData(5)
    marked, summaries = mark_curve_points(dominant_data, outline, dominant=True)
    assert marked[8] == CLOSING_VALUE
    assert marked[6] == CURVE_VALUE
    assert summaries[0].dominant


def test_curves_get_distinct_numbers():
    data = GlobalCurveData(7)
    outline = get_curves(data, _grid(7, [8, 9, 10, 36, 37, 38]))
    _, summaries = mark_curve_points(data, outline)
    assert [s.number for s in summaries] == [1, 2]
    assert data.curves_global_output[37] == 2


def test_transpose_internal():
    data = GlobalCurveData(3)
    data.curves_global_output[1] = 5
    data.transpose_internal()
    assert data.curves_global_output[3] == 5


def test_walk_gives_up_after_budget():
    walk = CurveWalk(start=5, grid_length=10)

    # bounce between 3 and 4 forever, never closing on the start
    with pytest.raises(CurveTraceError):
        walk.run(lambda index, direction, offset: 4 if index == 3 else 3)
    assert walk.number_of_checks == walk.max_checks


def test_walk_stops_when_stuck():
    walk = CurveWalk(start=5, grid_length=10)
    walk.run(lambda index, direction, offset: index)
    assert walk.cardinal_changes == 4
    assert walk.direction is Trigonometric.COS
