"""Corner erosion, accumulation, run filtering and bloat levels on a Grid.

Eroding a glyph repeatedly strips every cell that is not fully surrounded by
other filled cells. Thin strokes vanish after a round or two while thick
regions persist, so summing the rounds gives a heat map of the shape's core.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from glyphsight.constants import MAXIMUM_REDUCTIONS
from glyphsight.text.serializer import write_grid_file
from glyphsight.utils.grid import Grid
from glyphsight.utils.trigonometric import Trigonometric, get_index_from_direction

logger = logging.getLogger(__name__)


def set_bound_rows_to_zero(grid: Grid) -> None:
    """Zero the first and last rows, which can never be fully surrounded."""
    size = grid.size
    grid.data[:size] = 0
    grid.data[grid.data.size - size:] = 0


def process_corners(input_data: Grid, output_data: Grid) -> bool:
    """Mark in ``output_data`` every inner cell whose 3x3 neighbourhood is filled.

    Boundary columns are skipped. Returns True if two marked cells were found
    next to each other on a row.
    """
    size = input_data.size
    if size < 3:
        return False

    filled = input_data.as_matrix() > 0
    # Row above, current row and row below, each shifted one column left/right.
    surrounded = np.ones((size - 2, size - 2), dtype=bool)
    for row_shift in range(3):
        for column_shift in range(3):
            surrounded &= filled[row_shift:row_shift + size - 2, column_shift:column_shift + size - 2]

    output_data.as_matrix()[1:-1, 1:-1][surrounded] = 1

    return bool(np.any(surrounded[:, 1:] & surrounded[:, :-1]))


def decorner_once(input_data: Grid) -> tuple[Grid, bool]:
    """Remove every cell that is not surrounded by data too.

    Returns the eroded grid and whether two surviving cells sat in a row.
    """
    result = Grid.initialize(input_data.size, 0)

    set_bound_rows_to_zero(result)
    two_points_in_a_row = process_corners(input_data, result)

    return result, two_points_in_a_row


def accumulate_reductions(reductions: list[Grid]) -> Grid:
    """Sum every grid cell-wise into one grid."""
    result = Grid.initialize(reductions[0].size, 0)
    for item in reductions:
        result.data += item.data
    return result


def get_accumulation(
    input_data: Grid,
    max_reductions: int = MAXIMUM_REDUCTIONS,
    output_dir: Path | None = None,
) -> tuple[Grid, list[Grid]]:
    """Erode repeatedly and sum the rounds into a heat map.

    Erosion continues while the previous round still left two cells in a row
    and the round counter (starting at 1) stays below ``max_reductions``.
    When ``output_dir`` is given each round is written there as
    ``reduction#<n>.txt``.

    Returns the heat map and the list of eroded rounds.
    """
    working_data = input_data.normal_copy()

    reductions = 1
    process = True
    accumulative_data: list[Grid] = []

    while process and reductions < max_reductions:
        new_data, process = decorner_once(working_data)
        accumulative_data.append(new_data.normal_copy())
        working_data = new_data

        if output_dir is not None:
            write_grid_file(working_data, Path(output_dir) / f"reduction#{reductions}.txt")

        logger.debug("Erosion round %d kept %d cells", reductions, working_data.count_nonzero())
        reductions += 1

    return accumulate_reductions(accumulative_data), accumulative_data


def recurrent_trace(input_data: Grid, minimum_recursion: int) -> Grid:
    """Keep only cells that belong to a run of at least ``minimum_recursion``.

    The flat buffer is scanned in index order. Once a run reaches the minimum
    length it is marked back to its anchor, then marked forward until a zero
    breaks it.
    """
    working_data = input_data.data
    result = Grid.initialize(input_data.size, 0)
    working_result = result.data

    anchor_index = 0
    anchor_count = 0
    recursion_found = False

    for i in range(working_data.size):
        zero_entry = working_data[i] == 0

        if anchor_count == 0 and not zero_entry:
            anchor_index = i
            anchor_count += 1
            continue
        if zero_entry:
            anchor_count = 0
            recursion_found = False
        if not recursion_found and not zero_entry:
            anchor_count += 1
            if anchor_count >= minimum_recursion:
                recursion_found = True
                working_result[anchor_index:i] = 1
        if recursion_found:
            working_result[i] = 1

    return result


def trace_at(full_data: Grid, bloat_level: int, row_size: int, current_index: int) -> bool:
    """True if the square ring of radius ``bloat_level - 1`` around a cell is filled.

    The ring is walked clockwise from twelve o'clock. Any empty or border cell
    on the ring fails the check.
    """
    input_data = full_data.data

    half_step = bloat_level - 1
    full_step = half_step * 2

    index = current_index
    for _ in range(half_step):
        index = get_index_from_direction(index, row_size, Trigonometric.SIN)
        if full_data.test_border_index(index):
            return False
    if input_data[index] < 1:
        return False

    legs = (
        (Trigonometric.COS, half_step),
        (Trigonometric.NSIN, full_step),
        (Trigonometric.NCOS, full_step),
        (Trigonometric.SIN, full_step),
        (Trigonometric.COS, half_step),
    )
    for direction, steps in legs:
        for _ in range(steps):
            index = get_index_from_direction(index, row_size, direction)
            if input_data[index] < 1:
                return False
            if full_data.test_border_index(index):
                return False

    return True


def write_bloats(input_data: Grid) -> Grid:
    """Per-cell bloat level: the widest ring around the cell that stays filled.

    Levels grow one at a time while at least one cell reached the previous
    level and stay below half the row size.
    """
    row_size = input_data.size
    result = Grid.initialize(row_size, 0)

    bloat_level = 1
    maximum_bloat = row_size // 2
    bloat_increased = True

    while bloat_level < maximum_bloat and bloat_increased:
        bloat_increased = False
        for i in range(len(input_data)):
            if input_data.test_border_index(i):
                continue
            if input_data.data[i] == 1 and result.data[i] != bloat_level:
                if trace_at(input_data, bloat_level, row_size, i):
                    result.data[i] = bloat_level
                    bloat_increased = True
        bloat_level += 1

    logger.debug("Bloat levels reached %d on a %dx%d grid", bloat_level - 1, row_size, row_size)
    return result
