"""Rate a training instance against a base definition."""

from __future__ import annotations

import logging

from glyphsight.constants import COS_ERROR, COS_MARGIN, TIMING_ERROR_FRACTION
from glyphsight.learning.reconstruction import reconstruct_traces
from glyphsight.models.definition import DefinitionUnit
from glyphsight.models.reports import CompatibilityReport
from glyphsight.utils.math_helpers import Vector2, cos_between

logger = logging.getLogger(__name__)


def trace_count_within_range(base: DefinitionUnit, candidate: DefinitionUnit) -> bool:
    """A candidate may split strokes but never drop one or split every one twice."""
    return base.trace_count <= candidate.trace_count <= 2 * base.trace_count


def timing_rating(base: DefinitionUnit, candidate: DefinitionUnit) -> float:
    """Share of aligned traces drawn at about the same time step.

    Each slot whose time stamps differ by less than ``resolution * 0.2`` adds
    up to ``1 / base trace count``, falling linearly with the difference.
    """
    error_resolution = base.resolution * TIMING_ERROR_FRACTION
    if not base.traces or error_resolution <= 0:
        return 0.0

    share = 1.0 / base.trace_count
    rating = 0.0
    for base_trace, candidate_trace in zip(base.traces, candidate.traces):
        difference = abs(base_trace.time_stamp - candidate_trace.time_stamp)
        if difference < error_resolution:
            rating += share * (error_resolution - difference) / error_resolution
    return rating


def _similarity_share(v1: Vector2, v2: Vector2, share: float) -> float:
    cos = cos_between(v1, v2)
    if cos > COS_ERROR:
        return share * (COS_MARGIN - (1.0 - cos)) / COS_MARGIN
    return 0.0


def vectors_similarity(base: DefinitionUnit, candidate: DefinitionUnit) -> float:
    """Share of aligned traces pointing the same way."""
    if not base.traces:
        return 0.0
    share = 1.0 / base.trace_count
    return sum(
        _similarity_share(b.displacement, c.displacement, share)
        for b, c in zip(base.traces, candidate.traces)
    )


def offsets_similarity(base: DefinitionUnit, candidate: DefinitionUnit) -> float:
    """Share of aligned traces whose average point leans the same way."""
    if not base.traces:
        return 0.0
    share = 1.0 / base.trace_count
    return sum(
        _similarity_share(b.average_offset, c.average_offset, share)
        for b, c in zip(base.traces, candidate.traces)
    )


def report_compatibility(
    base: DefinitionUnit,
    candidate: DefinitionUnit,
    error_margin: float,
) -> CompatibilityReport:
    """Reconstruct ``candidate`` against ``base`` and rate the result.

    The diagnosis passes when the trace count is in range and none of the
    timing, vector or offset ratings falls below ``error_margin``. A failed
    reconstruction is discarded and the candidate is rated as drawn.
    """
    report = CompatibilityReport(reconstructed_instance=candidate.copy())
    report.trace_within_range = trace_count_within_range(base, candidate)

    if not report.trace_within_range:
        report.reconstruction_log.append(
            f"{candidate.trace_count} traces outside [{base.trace_count}, {2 * base.trace_count}]"
        )
        logger.debug("Instance %s rejected: trace count out of range", candidate.id)
        return report

    if candidate.trace_count != base.trace_count:
        result = reconstruct_traces(base, candidate)
        report.reconstruction_log.extend(result.log)
        if result.success:
            report.reconstructed_instance = result.instance
            report.reconstructed = True
        else:
            report.reconstruction_log.append("reconstruction discarded")

    instance = report.reconstructed_instance
    report.timing_rating = timing_rating(base, instance)
    report.vectors_similarity = vectors_similarity(base, instance)
    report.offsets_similarity = offsets_similarity(base, instance)

    report.diagnosis = all(rating >= error_margin for rating in report.ratings)
    return report
