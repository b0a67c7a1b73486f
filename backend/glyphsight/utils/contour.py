"""Closed-curve tracing on 0/1 grids.

``get_curves`` paints the outline of every filled region with 2 and hollows the
inside with 1. ``mark_curve_points`` then walks each outline once more, numbering
the curves and their points in ``GlobalCurveData`` and flagging the closing
point of each curve with 3.

Both passes share one walk: from the current cell try the current direction,
then the 45 degree step towards its derivative, then the derivative itself.
If nothing can be entered the direction rotates. Four rotations in place end
the walk, and so does coming back to the start.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from glyphsight.constants import MAX_CHECKS_FACTOR
from glyphsight.utils.grid import Grid
from glyphsight.utils.math_helpers import get_index_distance, get_midpoint_index, get_row_distance
from glyphsight.utils.trigonometric import Trigonometric, get_index_from_direction

logger = logging.getLogger(__name__)

CURVE_VALUE = 2
HOLLOW_VALUE = 1
CLOSING_VALUE = 3


class CurveTraceError(RuntimeError):
    """A curve walk ran out of checks before closing."""


@dataclass
class GlobalCurveData:
    """Shared state for one series of closed curve operations."""

    # All operations share row size
    row_size: int
    # Curve number of every point that belongs to a curve
    curves_global_output: Grid = field(init=False)
    # Position of every point within its curve
    curves_global_orderd: Grid = field(init=False)
    # Number given to the next curve
    global_output_number: int = 1
    # Position given to the next point of the current curve
    global_orderd_cardin: int = 0

    def __post_init__(self) -> None:
        self.curves_global_output = Grid.initialize(self.row_size, 0)
        self.curves_global_orderd = Grid.initialize(self.row_size, 0)

    def transpose_internal(self) -> None:
        """Transpose both internal grids, to operate against data that couldn't be transposed."""
        self.curves_global_output.transpose()
        self.curves_global_orderd.transpose()


@dataclass
class CurveSummary:
    number: int
    start: int
    closing: int
    midpoint: int
    point_count: int
    dominant: bool = False


@dataclass
class CurveWalk:
    """State of one walk along an outline."""

    start: int
    grid_length: int
    direction: Trigonometric = Trigonometric.COS
    current_index: int = -1
    cardinal_changes: int = 0
    number_of_checks: int = 0
    last_index_in_loop: int = -1

    def __post_init__(self) -> None:
        if self.current_index < 0:
            self.current_index = self.start

    @property
    def max_checks(self) -> int:
        return self.grid_length * MAX_CHECKS_FACTOR

    def run(
        self,
        try_step: Callable[[int, Trigonometric, int], int],
        on_move: Callable[[int], None] | None = None,
    ) -> None:
        """Walk until the curve closes, the walk is stuck, or checks run out.

        ``try_step(from_index, direction, offset45)`` returns the index entered,
        or ``from_index`` when the step is refused.
        """
        while 0 <= self.current_index < self.grid_length and self.number_of_checks < self.max_checks:
            if self.cardinal_changes >= 4 and self.last_index_in_loop == self.current_index:
                return

            self.last_index_in_loop = self.current_index

            candidates = (
                (self.direction, 0),
                (self.direction, -1),
                (self.direction.derivative(), 0),
            )
            for direction, offset in candidates:
                new_index = try_step(self.current_index, direction, offset)
                if new_index != self.current_index:
                    break
            else:
                self.direction = self.direction.derivative()
                self.cardinal_changes += 1
                self.number_of_checks += 1
                if self.number_of_checks >= self.max_checks:
                    self._give_up()
                continue

            self.current_index = new_index
            self.cardinal_changes = 0
            self.number_of_checks += 1

            if new_index == self.start:
                return
            if on_move is not None:
                on_move(new_index)

        if self.number_of_checks >= self.max_checks:
            self._give_up()

    def _give_up(self) -> None:
        raise CurveTraceError(
            "The process gave up before checking all values. "
            f"Is MAX_CHECKS_FACTOR too low? Index calling: {self.start}"
        )


def get_curves(global_data: GlobalCurveData, input_data: Grid) -> Grid:
    """Paint the outline of every region of 1s with 2, hollowing the inside with 1."""
    result_set = Grid.initialize(global_data.row_size, 0)

    curves_found = 0
    for i in range(len(input_data)):
        if input_data.data[i] == 1 and result_set.data[i] == 0:
            result_set.data[i] = CURVE_VALUE
            draw_curve_on(input_data, result_set, global_data, i)
            hollow_set(CURVE_VALUE, HOLLOW_VALUE, global_data.row_size, input_data, result_set)
            curves_found += 1

    logger.debug("Traced %d outlines", curves_found)
    return result_set


def hollow_set(
    anchor_value: int,
    hollow_value: int,
    row_size: int,
    input_data: Grid,
    result_set: Grid,
) -> None:
    """Mark cells that follow an anchor on the same filled row-span as processed.

    Keeps ``get_curves`` from starting new curves from inside a traced region.
    """
    working_input = input_data.data
    working_result = result_set.data

    anchor_enabled = False
    for i in range(working_result.size):
        if i % row_size == 0:
            anchor_enabled = False

        if anchor_enabled and working_input[i] != 0 and working_result[i] != anchor_value:
            working_result[i] = hollow_value
        if anchor_enabled and working_input[i] == 0:
            anchor_enabled = False
        if working_result[i] == anchor_value:
            anchor_enabled = True


def paint_if_natural_direction(
    from_index: int,
    row_size: int,
    direction: Trigonometric,
    offset: int,
    input_data: Grid,
    result_output: Grid,
) -> int:
    """Step onto a filled cell not yet hollowed, painting it as curve.

    Returns the new index, or ``from_index`` if the step is refused.
    """
    target = get_index_from_direction(from_index, row_size, direction, offset)
    if input_data.test_index(target):
        if input_data.data[target] == 1 and result_output.data[target] != HOLLOW_VALUE:
            result_output.data[target] = CURVE_VALUE
            return target
    return from_index


def draw_curve_on(
    input_data: Grid,
    result_output: Grid,
    global_data: GlobalCurveData,
    index: int,
) -> None:
    """Walk the outline starting at ``index``, painting every cell entered.

    Raises CurveTraceError if the walk exceeds its check budget.
    """
    row_size = global_data.row_size
    walk = CurveWalk(start=index, grid_length=len(input_data))

    def try_step(from_index: int, direction: Trigonometric, offset: int) -> int:
        return paint_if_natural_direction(from_index, row_size, direction, offset, input_data, result_output)

    walk.run(try_step)


def find_curve_on(
    global_data: GlobalCurveData,
    outline: Grid,
    marked: Grid,
    start: int,
    dominant: bool = False,
) -> CurveSummary:
    """Number the points of the outline curve through ``start``.

    The point farthest from ``start`` becomes the closing point (3 in
    ``marked``). A curve that never leaves its row is a straight run: unless it
    is ``dominant`` every cell between start and end is set to 1 instead.
    """
    row_size = global_data.row_size
    curve_number = global_data.global_output_number
    output = global_data.curves_global_output.data
    orderd = global_data.curves_global_orderd.data

    global_data.global_orderd_cardin = 0
    closing = start
    closing_distance = 0.0

    def visit(index: int) -> None:
        nonlocal closing, closing_distance
        global_data.global_orderd_cardin += 1
        output[index] = curve_number
        orderd[index] = global_data.global_orderd_cardin

        distance = get_index_distance(start, index, row_size)
        if distance > closing_distance:
            closing = index
            closing_distance = distance

    def try_step(from_index: int, direction: Trigonometric, offset: int) -> int:
        target = get_index_from_direction(from_index, row_size, direction, offset)
        if not outline.test_index(target) or outline.data[target] != CURVE_VALUE:
            return from_index
        if target == start or output[target] == 0:
            return target
        return from_index

    visit(start)
    walk = CurveWalk(start=start, grid_length=len(outline))
    walk.run(try_step, on_move=visit)

    if get_row_distance(start, closing, row_size) == 0 and not dominant:
        low, high = sorted((start, closing))
        marked.data[low:high + 1] = HOLLOW_VALUE
    else:
        marked.data[closing] = CLOSING_VALUE

    return CurveSummary(
        number=curve_number,
        start=start,
        closing=closing,
        midpoint=get_midpoint_index(start, closing, row_size),
        point_count=global_data.global_orderd_cardin,
        dominant=dominant,
    )


def mark_curve_points(
    global_data: GlobalCurveData,
    outline: Grid,
    dominant: bool = False,
) -> tuple[Grid, list[CurveSummary]]:
    """Number every unvisited outline curve and flag its closing point.

    Returns a copy of ``outline`` with closing points set to 3 (or straight
    runs set to 1) and one summary per curve found.
    """
    marked = outline.normal_copy()
    summaries: list[CurveSummary] = []

    output = global_data.curves_global_output.data
    for i in range(len(outline)):
        if outline.data[i] == CURVE_VALUE and output[i] == 0:
            summaries.append(find_curve_on(global_data, outline, marked, i, dominant))
            global_data.global_output_number += 1

    logger.debug("Marked %d curves (dominant=%s)", len(summaries), dominant)
    return marked, summaries
