"""Majority-vote training of a definition from noisy instances.

Every trace slot is trained on its own. Three ballots over the grid cells
collect votes: content (every cell of the run), vanguard (first cell) and
rearguard (last cell). The base trace seeds each ballot with +1 on its cells.
Each valid instance then takes ``1 / valid_count`` from every cell and gives
back ``2 / valid_count`` to the cells it covers, so a cell gains whenever the
instances covering it outnumber the ones that don't.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from glyphsight.constants import BALLOT_EPSILON, BALLOT_TIE_MARGIN
from glyphsight.learning.compatibility import report_compatibility
from glyphsight.models.definition import DefinitionUnit, Trace, TrainingUnit

logger = logging.getLogger(__name__)


@dataclass
class Ballots:
    content: NDArray[np.float64]
    vanguard: NDArray[np.float64]
    rearguard: NDArray[np.float64]

    @classmethod
    def seeded(cls, base_trace: Trace, cell_count: int) -> Ballots:
        ballots = cls(
            content=np.zeros(cell_count, dtype=np.float64),
            vanguard=np.zeros(cell_count, dtype=np.float64),
            rearguard=np.zeros(cell_count, dtype=np.float64),
        )
        ballots.content[np.unique(base_trace.indexes)] += 1.0
        ballots.vanguard[base_trace.vanguard] += 1.0
        ballots.rearguard[base_trace.rearguard] += 1.0
        return ballots


def cast_ballots(ballots: Ballots, trace: Trace | None, valid_count: int) -> None:
    """Add one instance's votes. A missing trace only takes votes away."""
    penalty = 1.0 / valid_count
    ballots.content -= penalty
    ballots.vanguard -= penalty
    ballots.rearguard -= penalty

    if trace is None or not trace.indexes:
        return

    reward = 2.0 / valid_count
    ballots.content[np.unique(trace.indexes)] += reward
    ballots.vanguard[trace.vanguard] += reward
    ballots.rearguard[trace.rearguard] += reward


def _elect(ballot: NDArray[np.float64], fallback: int) -> int:
    """Cell with the most votes; near-ties keep ``fallback``."""
    best = float(ballot.max())
    contenders = np.count_nonzero(ballot >= best - BALLOT_TIE_MARGIN)
    if contenders > 1:
        return fallback
    return int(ballot.argmax())


def combine_into_trace(
    time_stamp: int,
    vanguard: int,
    content: list[int],
    rearguard: int,
    resolution: int,
) -> Trace:
    """Build ``[vanguard] + content + [rearguard]`` without repeating a cell."""
    ordered = [vanguard]
    for index in content:
        if index != rearguard and index not in ordered:
            ordered.append(index)
    if rearguard not in ordered:
        ordered.append(rearguard)
    return Trace.new(time_stamp, ordered, resolution)


def train_trace_with(base_trace: Trace, ballots: Ballots, resolution: int) -> Trace:
    """Elect the trained run from the ballots of one trace slot."""
    content = [int(index) for index in np.flatnonzero(ballots.content > BALLOT_EPSILON)]
    vanguard = _elect(ballots.vanguard, base_trace.vanguard)
    rearguard = _elect(ballots.rearguard, base_trace.rearguard)
    return combine_into_trace(base_trace.time_stamp, vanguard, content, rearguard, resolution)


def train_w_report(unit: TrainingUnit) -> DefinitionUnit:
    """Train a new definition from the base and its instances.

    Every instance is replaced by its reconstructed version. Only instances
    whose compatibility diagnosis passes vote; their indexes are left in
    ``unit.valid_instances`` and all reports in ``unit.reports``.

    Raises ValueError if the unit has no training instances or an instance
    is drawn on a grid of another resolution.
    """
    if not unit.training_instances:
        raise ValueError(f"Definition {unit.base.id} has no training instances")

    base = unit.base
    for position, instance in enumerate(unit.training_instances):
        if instance.resolution != base.resolution:
            raise ValueError(
                f"Instance {position} has resolution {instance.resolution}, expected {base.resolution}"
            )

    unit.reports = []
    unit.valid_instances = []

    for position, instance in enumerate(unit.training_instances):
        report = report_compatibility(base, instance, unit.error_margin)
        instance.traces = report.reconstructed_instance.copy().traces
        unit.reports.append(report)
        if report.diagnosis:
            unit.valid_instances.append(position)

    valid_count = len(unit.valid_instances)
    if valid_count == 0:
        logger.warning("No instance of %s passed compatibility; keeping the base", base.id)

    cell_count = base.resolution * base.resolution
    trained = DefinitionUnit(resolution=base.resolution, id=base.id)
    for slot, base_trace in enumerate(base.traces):
        ballots = Ballots.seeded(base_trace, cell_count)
        for position in unit.valid_instances:
            instance_traces = unit.training_instances[position].traces
            trace = instance_traces[slot] if slot < len(instance_traces) else None
            cast_ballots(ballots, trace, valid_count)
        trained.traces.append(train_trace_with(base_trace, ballots, base.resolution))

    logger.info(
        "Trained %s from %d/%d instances",
        base.id,
        valid_count,
        len(unit.training_instances),
    )
    return trained
