"""Shared test fixtures."""

from __future__ import annotations

import pytest

from glyphsight.models.definition import DefinitionUnit


# 7x7 block of ink inside a 9x9 canvas
BLOCK_GRID_TEXT = "\n".join(
    ["000000000"] + ["011111110"] * 7 + ["000000000"]
) + "\n"

# Thick horizontal bar spanning the whole width of a 12x12 canvas
BAR_GRID_TEXT = "\n".join(
    ["000000000000"] * 2 + ["111111111111"] * 5 + ["000000000000"] * 5
) + "\n"

BLANK_GRID_TEXT = "00000\n" * 5


def make_definition(id: str, resolution: int, *runs: tuple[int, list[int]]) -> DefinitionUnit:
    """Definition fed with ``(time_stamp, indexes)`` runs in order."""
    definition = DefinitionUnit(resolution=resolution, id=id)
    for time_stamp, indexes in runs:
        definition.feed(time_stamp, indexes)
    return definition


def base_runs() -> list[tuple[int, list[int]]]:
    # horizontal, vertical, then a diagonal on a 5x5 grid
    return [(0, [1, 2, 3]), (1, [10, 15, 20]), (2, [5, 11, 17, 23])]


def training_instances() -> list[DefinitionUnit]:
    """Noisy copies of the base; positions 0, 2, 4, 6 and 7 are compatible."""
    return [
        # 0: exact copy
        make_definition("sample", 5, *base_runs()),
        # 1: one stroke missing
        make_definition("sample", 5, (0, [1, 2, 3]), (1, [10, 15, 20])),
        # 2: diagonal split in two, drawn at the right time
        make_definition("sample", 5, (0, [1, 2, 3]), (1, [10, 15, 20]), (2, [5, 11]), (2, [17, 23])),
        # 3: same split, every stroke one step late
        make_definition("sample", 5, (1, [1, 2, 3]), (2, [10, 15, 20]), (3, [5, 11]), (4, [17, 23])),
        # 4: last cell of the diagonal off by one
        make_definition("sample", 5, (0, [1, 2, 3]), (1, [10, 15, 20]), (2, [5, 11, 17, 22])),
        # 5: strokes wander off their average point
        make_definition("sample", 5, (0, [1, 11, 16, 3]), (1, [10, 15, 20]), (2, [5, 9, 4, 23])),
        # 6: everything shifted one column right
        make_definition("sample", 5, (0, [2, 3, 4]), (1, [11, 16, 21]), (2, [6, 12, 18, 24])),
        # 7: vertical stroke lifted halfway, diagonal late
        make_definition("sample", 5, (0, [1, 2, 3]), (1, [10, 15]), (2, [20]), (3, [5, 11, 17, 23])),
    ]


@pytest.fixture
def base_definition() -> DefinitionUnit:
    return make_definition("sample", 5, *base_runs())


@pytest.fixture
def instances() -> list[DefinitionUnit]:
    return training_instances()


@pytest.fixture
def dictionary() -> list[DefinitionUnit]:
    """Two definitions drawing the same strokes in opposite order."""
    return [
        make_definition("A", 5, (0, [1, 2, 3]), (1, [10, 15, 20])),
        make_definition("B", 5, (0, [5, 10, 15]), (1, [1, 2, 3])),
    ]


@pytest.fixture
def block_grid_text() -> str:
    return BLOCK_GRID_TEXT


@pytest.fixture
def bar_grid_text() -> str:
    return BAR_GRID_TEXT
