"""Living database of known definitions plus a per-time-step quick index.

Two text snapshots back it:

- heavy file: one line per definition, ``id.v1,v2,...;v1,v2,...;`` where each
  ``;``-terminated group is the index run of one time step, empty when
  nothing was drawn at that step;
- quick file: one line per time step, ``id.x,y,ave_x,ave_y,.id.x,y,...``
  holding every definition's displacement and average offset at that step.

Loading cross-checks the two. A mismatch makes the load report failure
rather than raise, leaving the decision to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from glyphsight.models.definition import DefinitionUnit, Trace
from glyphsight.text.parser import parse_heavy_line, parse_quick_line
from glyphsight.text.serializer import heavy_line, quick_lines
from glyphsight.utils.math_helpers import ZERO, Vector2

logger = logging.getLogger(__name__)

QUICK_PREFIX = "quickaccess_"
HEAVY_PREFIX = "heavyaccess_"


@dataclass
class QuickTrace:
    id: str = "Untreated trace"
    trace: Vector2 = ZERO
    average: Vector2 = ZERO

    @classmethod
    def from_trace(cls, id: str, trace: Trace) -> QuickTrace:
        return cls(id=id, trace=trace.displacement, average=trace.average_offset)

    def matches(self, trace: Trace) -> bool:
        return self.trace == trace.displacement and self.average == trace.average_offset


@dataclass
class TraceGroup:
    """Quick traces of every definition at one time step."""

    group_content: list[QuickTrace] = field(default_factory=list)


@dataclass
class LivingDataUnit:
    definitions: list[DefinitionUnit] = field(default_factory=list)
    trace_groups: list[TraceGroup] = field(default_factory=list)

    @classmethod
    def from_definitions(cls, definitions: list[DefinitionUnit]) -> LivingDataUnit:
        unit = cls()
        for definition in definitions:
            unit.add_definition(definition)
        return unit

    def add_definition(self, definition: DefinitionUnit) -> None:
        """Register a definition and index each trace under its time stamp."""
        self.definitions.append(definition)
        for trace in definition.traces:
            if trace.time_stamp < 0:
                logger.warning("Not indexing %s trace with time stamp %d", definition.id, trace.time_stamp)
                continue
            while len(self.trace_groups) <= trace.time_stamp:
                self.trace_groups.append(TraceGroup())
            self.trace_groups[trace.time_stamp].group_content.append(QuickTrace.from_trace(definition.id, trace))

    def get_definition(self, id: str) -> DefinitionUnit | None:
        for definition in self.definitions:
            if definition.id == id:
                return definition
        return None

    def load_from_file(self, quick_target: Path | str, heavy_target: Path | str, resolution: int) -> bool:
        """Replace the contents with both snapshots.

        Returns False if either snapshot is malformed or a definition's trace
        has no matching quick trace at its time step. Missing files raise
        FileNotFoundError.
        """
        heavy_content = Path(heavy_target).read_text(encoding="utf-8")
        quick_content = Path(quick_target).read_text(encoding="utf-8")

        try:
            definitions = [parse_heavy_line(line, resolution) for line in heavy_content.splitlines() if line.strip()]
            trace_groups = [
                TraceGroup(
                    group_content=[QuickTrace(id, trace, average) for id, trace, average in parse_quick_line(line)]
                )
                for line in quick_content.splitlines()
            ]
        except ValueError as e:
            logger.warning("Malformed snapshot %s / %s: %s", quick_target, heavy_target, e)
            return False

        self.definitions = definitions
        self.trace_groups = trace_groups

        for definition in self.definitions:
            for heavy_trace in definition.traces:
                step = heavy_trace.time_stamp
                if step >= len(self.trace_groups):
                    logger.warning("Quick index has no time step %d for %s", step, definition.id)
                    return False
                if not any(
                    quick_trace.id == definition.id and quick_trace.matches(heavy_trace)
                    for quick_trace in self.trace_groups[step].group_content
                ):
                    logger.warning("Quick index disagrees with %s at time step %d", definition.id, step)
                    return False

        logger.info(
            "Loaded %d definitions over %d time steps",
            len(self.definitions),
            len(self.trace_groups),
        )
        return True

    def dump_to_file(self, directory: Path | str, append_name: str) -> tuple[Path, Path]:
        """Write the quick and heavy snapshots. Returns their paths.

        Raises ValueError, before touching the directory, if a definition
        cannot be written (see ``heavy_line``).
        """
        quick_text = "".join(line + "\n" for line in quick_lines(self.definitions))
        heavy_text = "".join(heavy_line(definition) + "\n" for definition in self.definitions)

        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        quick_path = directory / f"{QUICK_PREFIX}{append_name}"
        heavy_path = directory / f"{HEAVY_PREFIX}{append_name}"
        quick_path.write_text(quick_text, encoding="utf-8")
        heavy_path.write_text(heavy_text, encoding="utf-8")

        logger.info("Dumped %d definitions to %s", len(self.definitions), directory)
        return quick_path, heavy_path
