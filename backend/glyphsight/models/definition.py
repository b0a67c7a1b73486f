"""Traces and definitions: the labeled stroke patterns that get matched and trained.

A Trace summarises one stroke (a run of grid-cell indexes drawn at one time
step) by its net displacement and the offset of its average point from its
first point. A DefinitionUnit is the ordered list of traces of one pattern.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from glyphsight.constants import DEFAULT_DEFINITION_ID
from glyphsight.utils.math_helpers import ZERO, Vector2, get_coordinates_from


@dataclass
class Trace:
    time_stamp: int
    indexes: list[int]
    # Coordinates of the last index minus those of the first
    displacement: Vector2 = ZERO
    # Floor of the mean coordinates minus those of the first index
    average_offset: Vector2 = ZERO
    # Row size used to decode the indexes
    resolution: int = 0

    @classmethod
    def new(cls, time_stamp: int, indexes: list[int], resolution: int) -> Trace:
        """Summarise a run of indexes.

        Raises ValueError for an empty run or an index outside the
        ``resolution`` x ``resolution`` grid.
        """
        if not indexes:
            raise ValueError("A trace needs at least one index")
        cell_count = resolution * resolution
        for entry in indexes:
            if not 0 <= entry < cell_count:
                raise ValueError(f"Index {entry} is outside the {resolution}x{resolution} grid")

        first = get_coordinates_from(indexes[0], resolution)
        last = get_coordinates_from(indexes[-1], resolution)

        total = ZERO
        for entry in indexes:
            total = total + get_coordinates_from(entry, resolution)
        average = total.floor_div(len(indexes))

        return cls(
            time_stamp=time_stamp,
            indexes=list(indexes),
            displacement=last - first,
            average_offset=average - first,
            resolution=resolution,
        )

    @classmethod
    def empty(cls) -> Trace:
        """Placeholder trace; a time stamp of -1 means nothing was drawn."""
        return cls(time_stamp=-1, indexes=[])

    def __len__(self) -> int:
        return len(self.indexes)

    @property
    def vanguard(self) -> int:
        return self.indexes[0]

    @property
    def rearguard(self) -> int:
        return self.indexes[-1]

    def merged_with(self, other: Trace) -> Trace:
        """New trace over this run followed by ``other``'s, keeping this time stamp."""
        return Trace.new(self.time_stamp, self.indexes + other.indexes, self.resolution)

    def copy(self) -> Trace:
        return Trace(
            time_stamp=self.time_stamp,
            indexes=list(self.indexes),
            displacement=self.displacement,
            average_offset=self.average_offset,
            resolution=self.resolution,
        )


@dataclass
class DefinitionUnit:
    """One labeled multi-stroke pattern."""

    resolution: int
    id: str = DEFAULT_DEFINITION_ID
    traces: list[Trace] = field(default_factory=list)

    def feed(self, time_stamp: int, indexes: list[int]) -> None:
        self.traces.append(Trace.new(time_stamp, indexes, self.resolution))

    def copy(self) -> DefinitionUnit:
        return DefinitionUnit(
            resolution=self.resolution,
            id=self.id,
            traces=[trace.copy() for trace in self.traces],
        )

    def all_indexes(self) -> set[int]:
        return {index for trace in self.traces for index in trace.indexes}

    @property
    def trace_count(self) -> int:
        return len(self.traces)


@dataclass
class TrainingUnit:
    """One training run: a base definition and the noisy instances voting on it.

    ``reports`` and ``valid_instances`` are filled in by the training pass.
    """

    base: DefinitionUnit
    training_instances: list[DefinitionUnit] = field(default_factory=list)
    error_margin: float = 0.5
    reports: list = field(default_factory=list)
    valid_instances: list[int] = field(default_factory=list)
