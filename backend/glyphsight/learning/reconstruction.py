"""Align a candidate definition's traces to a base definition.

A candidate drawn with more strokes than the base usually split one stroke in
two. Walking both sequences, each base trace is matched either by the current
candidate trace alone or by that trace merged with the next one. Three signals
decide: cosine similarity of the displacements, cosine similarity of the
average offsets, and how close the run lengths are.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from glyphsight.constants import COS_ERROR
from glyphsight.models.definition import DefinitionUnit, Trace
from glyphsight.models.reports import ReconstructionResult
from glyphsight.utils.math_helpers import cos_between

logger = logging.getLogger(__name__)


class Choice(enum.Enum):
    SINGLE = "single"
    MERGED = "merged"


@dataclass(frozen=True)
class TraceLikeness:
    """How a candidate trace compares against a base trace."""

    trace_cos: float
    offset_cos: float
    length_gap: int

    @classmethod
    def between(cls, base: Trace, candidate: Trace) -> TraceLikeness:
        return cls(
            trace_cos=cos_between(base.displacement, candidate.displacement),
            offset_cos=cos_between(base.average_offset, candidate.average_offset),
            length_gap=abs(len(base) - len(candidate)),
        )

    @property
    def passes(self) -> bool:
        return self.trace_cos > COS_ERROR and self.offset_cos > COS_ERROR


def choose_alignment(single: TraceLikeness, merged: TraceLikeness) -> tuple[Choice, bool]:
    """Pick the single or merged candidate for one base trace.

    In order:
    1. both pass the cosine threshold: the closer run length wins, ties keep
       the single trace;
    2. merged is strictly closer in length and passes: merged;
    3. otherwise a three-signal vote, merged needing 2 of 3.

    Returns the choice and whether it clears the cosine threshold.
    """
    if single.passes and merged.passes:
        if merged.length_gap < single.length_gap:
            return Choice.MERGED, True
        return Choice.SINGLE, True

    if merged.length_gap < single.length_gap and merged.passes:
        return Choice.MERGED, True

    votes = sum((
        merged.trace_cos > single.trace_cos,
        merged.offset_cos > single.offset_cos,
        merged.length_gap < single.length_gap,
    ))
    choice = Choice.MERGED if votes >= 2 else Choice.SINGLE
    winner = merged if choice is Choice.MERGED else single
    return choice, winner.passes


def reconstruct_traces(base: DefinitionUnit, candidate: DefinitionUnit) -> ReconstructionResult:
    """Rebuild ``candidate`` with one trace per base trace, merging split strokes.

    Candidate traces left over once every base trace is matched are dropped.
    ``success`` is False when fewer traces than the base could be produced.
    """
    base_traces = base.traces
    candidate_traces = candidate.traces

    rebuilt: list[Trace] = []
    log: list[str] = []

    base_cursor = 0
    index_for_entry = 0
    while base_cursor < len(base_traces) and index_for_entry < len(candidate_traces):
        base_trace = base_traces[base_cursor]
        single = candidate_traces[index_for_entry]

        if index_for_entry + 1 >= len(candidate_traces):
            rebuilt.append(single.copy())
            log.append(f"slot {base_cursor}: single #{index_for_entry} (last candidate)")
            base_cursor += 1
            index_for_entry += 1
            continue

        merged = single.merged_with(candidate_traces[index_for_entry + 1])
        choice, accepted = choose_alignment(
            TraceLikeness.between(base_trace, single),
            TraceLikeness.between(base_trace, merged),
        )
        verdict = "accepted" if accepted else "rejected"

        if choice is Choice.MERGED:
            rebuilt.append(merged)
            log.append(
                f"slot {base_cursor}: merged #{index_for_entry}+#{index_for_entry + 1} ({verdict})"
            )
            index_for_entry += 2
        else:
            rebuilt.append(single.copy())
            log.append(f"slot {base_cursor}: single #{index_for_entry} ({verdict})")
            index_for_entry += 1
        base_cursor += 1

    if index_for_entry < len(candidate_traces):
        log.append(f"dropped {len(candidate_traces) - index_for_entry} leftover traces")

    success = len(rebuilt) == len(base_traces)
    if not success:
        log.append(f"produced {len(rebuilt)} of {len(base_traces)} traces")
        logger.debug("Reconstruction of %s failed: %s", candidate.id, log[-1])

    instance = DefinitionUnit(resolution=candidate.resolution, id=candidate.id, traces=rebuilt)
    return ReconstructionResult(instance=instance, success=success, log=log)
