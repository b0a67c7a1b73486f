"""Incremental prediction over the living database.

Strokes are fed one time step at a time. Each fed trace is compared against
every definition's quick trace at the same step, and the likeness adds up
across steps so the ranking sharpens as more strokes arrive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from glyphsight.constants import PREDICTION_LIMIT
from glyphsight.learning.database import LivingDataUnit
from glyphsight.models.definition import Trace
from glyphsight.utils.math_helpers import cos_between

logger = logging.getLogger(__name__)


@dataclass
class Prediction:
    id: str
    likeness: float


@dataclass
class Medium:
    data_unit: LivingDataUnit
    last_trace: Trace = field(default_factory=Trace.empty)
    predictions: list[Prediction] = field(default_factory=list)
    current_best: str | None = None

    def reset_search(self) -> None:
        self.last_trace = Trace.empty()
        self.predictions = []
        self.current_best = None

    def feed_trace(self, trace: Trace) -> None:
        self.last_trace = trace
        self.update_search()

    def update_search(self) -> None:
        """Score every definition at the last trace's time step.

        Likeness is the sum of the displacement and offset cosines, each
        clamped at 0, so it ranges over [0, 2]. Candidates that do not beat
        the lowest of the first ten scores seen are discarded.
        """
        time_stamp = self.last_trace.time_stamp
        if time_stamp < 0 or time_stamp >= len(self.data_unit.trace_groups):
            logger.debug("No trace group for time stamp %d", time_stamp)
            return

        partial: list[Prediction] = []
        worst_of_ten = 1.0
        worst_count = 0
        for entry in self.data_unit.trace_groups[time_stamp].group_content:
            trace_likeness = max(0.0, cos_between(self.last_trace.displacement, entry.trace))
            average_likeness = max(0.0, cos_between(self.last_trace.average_offset, entry.average))
            total = trace_likeness + average_likeness

            if worst_count < PREDICTION_LIMIT and total < worst_of_ten:
                worst_of_ten = total
                worst_count += 1

            partial.append(Prediction(entry.id, total))

        self.update_predictions([p for p in partial if p.likeness > worst_of_ten])

    def update_predictions(self, new_predictions: list[Prediction]) -> None:
        """Fold one step's scores into the running ranking.

        Known ids add their new likeness; ids first seen at step ``t`` enter
        with ``likeness ** t``. Ids missing from this step drop out.
        """
        if not self.predictions:
            self.predictions = list(new_predictions)
            return

        previous = {p.id: p.likeness for p in self.predictions}
        combined: list[Prediction] = []
        best = -1.0
        for entry in new_predictions:
            if entry.id in previous:
                value = previous[entry.id] + entry.likeness
            else:
                value = entry.likeness ** self.last_trace.time_stamp
            if value > best:
                best = value
                self.current_best = entry.id
            combined.append(Prediction(entry.id, value))

        self.predictions = combined
        logger.debug("Best after step %d: %s", self.last_trace.time_stamp, self.current_best)

    def get_list_of_predictions(self) -> tuple[list[str], list[float]]:
        """Top predictions, best first."""
        ranked = sorted(self.predictions, key=lambda p: p.likeness, reverse=True)[:PREDICTION_LIMIT]
        return [p.id for p in ranked], [p.likeness for p in ranked]
