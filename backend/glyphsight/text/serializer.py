"""Text renderings of grids, definitions, snapshots and diagnostics."""

from __future__ import annotations

from pathlib import Path

from glyphsight.models.definition import DefinitionUnit
from glyphsight.models.reports import CompatibilityReport
from glyphsight.utils.grid import Grid

EMPTY_CELL = "**"
SNAPSHOT_SEPARATORS = ".;,"


def grid_to_text(grid: Grid) -> str:
    """One line per row, cell values written back to back."""
    rows = grid.as_matrix()
    return "".join("".join(str(value) for value in row) + "\n" for row in rows)


def write_grid_file(grid: Grid, path: Path | str) -> None:
    Path(path).write_text(grid_to_text(grid), encoding="utf-8")


def definition_to_text(definition: DefinitionUnit) -> str:
    """Index map of every cell the definition covers.

    Covered cells show their index padded to two characters, the rest ``**``.
    """
    covered = definition.all_indexes()
    resolution = definition.resolution
    lines = []
    for row in range(resolution):
        cells = []
        for index in range(row * resolution, (row + 1) * resolution):
            cells.append(f"{index:<2}" if index in covered else EMPTY_CELL)
        lines.append("".join(cells))
    return "".join(line + "\n" for line in lines)


def check_snapshot_id(id: str) -> None:
    """Raise ValueError for an id the snapshot lines cannot hold."""
    if not id or any(char in SNAPSHOT_SEPARATORS or char.isspace() for char in id):
        raise ValueError(f"Definition id {id!r} cannot be written to a snapshot")


def heavy_line(definition: DefinitionUnit) -> str:
    """``id.`` followed by one ``;``-terminated group per time step.

    Time steps without a trace get an empty group, so the group position is
    the time stamp. Raises ValueError for an unwritable id or time stamps
    that do not strictly increase.
    """
    check_snapshot_id(definition.id)
    groups: list[str] = []
    for trace in definition.traces:
        if trace.time_stamp < len(groups):
            raise ValueError(
                f"Definition {definition.id} has time stamp {trace.time_stamp} after step {len(groups) - 1}"
            )
        groups.extend([""] * (trace.time_stamp - len(groups)))
        groups.append(",".join(str(index) for index in trace.indexes))
    return definition.id + "." + "".join(group + ";" for group in groups)


def quick_lines(definitions: list[DefinitionUnit]) -> list[str]:
    """One line per time step with the displacement and offset of every definition drawn at it."""
    steps = 0
    for definition in definitions:
        check_snapshot_id(definition.id)
        for trace in definition.traces:
            if trace.time_stamp < 0:
                raise ValueError(f"Definition {definition.id} has negative time stamp {trace.time_stamp}")
            steps = max(steps, trace.time_stamp + 1)

    entries: list[list[str]] = [[] for _ in range(steps)]
    for definition in definitions:
        for trace in definition.traces:
            d, a = trace.displacement, trace.average_offset
            entries[trace.time_stamp].append(f"{definition.id}.{d.x},{d.y},{a.x},{a.y},.")
    return ["".join(step) for step in entries]


def predictions_to_text(ids: list[str], values: list[float]) -> str:
    return "".join(f"{id} - {value}\n" for id, value in zip(ids, values))


def report_to_text(report: CompatibilityReport) -> str:
    lines = [
        f"Trace within range: {report.trace_within_range}",
        f"Reconstructed: {report.reconstructed}",
        f"Timing rating: {report.timing_rating:.3f}",
        f"Vectors similarity: {report.vectors_similarity:.3f}",
        f"Offsets similarity: {report.offsets_similarity:.3f}",
        f"Diagnosis: {'pass' if report.diagnosis else 'fail'}",
    ]
    lines.extend(f"  {entry}" for entry in report.reconstruction_log)
    return "\n".join(lines) + "\n"
