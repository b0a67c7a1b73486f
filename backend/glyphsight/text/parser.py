"""Parse grids, heavy lines and quick lines from their text forms."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from glyphsight.models.definition import DefinitionUnit
from glyphsight.utils.grid import Grid
from glyphsight.utils.math_helpers import Vector2


def parse_digit_text(text: str) -> list[int]:
    """Every decimal digit in ``text``, in order. Anything else is skipped."""
    return [int(character) for character in text if character.isdigit()]


def text_to_grid(text: str, size: int | None = None) -> Grid:
    """Build a grid from digit text.

    Without ``size`` the row count is taken from the non-blank lines.
    Raises ValueError if the digit count is not ``size * size``.
    """
    if size is None:
        size = sum(1 for line in text.splitlines() if line.strip())
    return Grid.build(size, parse_digit_text(text), dtype=np.uint32)


def read_grid_file(path: Path | str, size: int | None = None) -> Grid:
    return text_to_grid(Path(path).read_text(encoding="utf-8"), size)


def _parse_ints(chunk: str) -> list[int]:
    values = []
    for entry in chunk.split(","):
        entry = entry.strip()
        if entry.lstrip("-").isdigit():
            values.append(int(entry))
    return values


def parse_heavy_line(line: str, resolution: int) -> DefinitionUnit:
    """Parse ``id.i,i,i;i,i;...`` into a definition.

    Every ``;``-separated group is one time step; empty groups advance the
    time stamp without adding a trace.
    """
    id, separator, body = line.strip().partition(".")
    if not separator:
        raise ValueError(f"Heavy line has no id separator: {line!r}")

    definition = DefinitionUnit(resolution=resolution, id=id)
    for time_stamp, group in enumerate(body.split(";")):
        indexes = _parse_ints(group)
        if indexes:
            definition.feed(time_stamp, indexes)
    return definition


def parse_quick_line(line: str) -> list[tuple[str, Vector2, Vector2]]:
    """Parse ``id.x,y,ax,ay,.id.x,y,ax,ay,.`` into (id, displacement, offset) triples."""
    entries = line.strip().split(".")
    result = []
    # the element after the final "." is empty
    for position in range(0, len(entries) - 2, 2):
        values = _parse_ints(entries[position + 1])
        if len(values) < 4:
            raise ValueError(f"Quick entry for {entries[position]!r} needs 4 values")
        result.append((
            entries[position],
            Vector2(values[0], values[1]),
            Vector2(values[2], values[3]),
        ))
    return result
