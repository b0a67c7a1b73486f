"""Per-instance diagnostics produced while training a definition."""

from __future__ import annotations

from dataclasses import dataclass, field

from glyphsight.models.definition import DefinitionUnit


@dataclass
class ReconstructionResult:
    """Outcome of aligning a candidate's traces to a base definition."""

    instance: DefinitionUnit
    # True if exactly one trace per base trace was produced
    success: bool = False
    log: list[str] = field(default_factory=list)


@dataclass
class CompatibilityReport:
    """How well one training instance agrees with the base definition.

    Ratings are shares in [0, 1]: each aligned trace slot contributes at most
    1 / base trace count.
    """

    reconstructed_instance: DefinitionUnit
    trace_within_range: bool = False
    timing_rating: float = 0.0
    vectors_similarity: float = 0.0
    offsets_similarity: float = 0.0
    diagnosis: bool = False
    reconstruction_log: list[str] = field(default_factory=list)
    reconstructed: bool = False

    @property
    def ratings(self) -> tuple[float, float, float]:
        return (self.timing_rating, self.vectors_similarity, self.offsets_similarity)
