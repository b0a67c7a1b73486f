"""PipelineContext: the mutable state handed from transform to transform.

Every intermediate grid lives on the context so later layers (and callers)
can read what earlier layers produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from glyphsight.engine.config import PipelineConfig
from glyphsight.utils.contour import CurveSummary, GlobalCurveData
from glyphsight.utils.grid import Grid


@dataclass
class PipelineContext:
    """Shared state flowing through the entire pipeline."""

    # Binary input, 1 for ink
    source: Grid
    # Set by the pipeline before any transform runs
    config: PipelineConfig = field(default_factory=PipelineConfig)
    # Curve numbering shared by every curve pass of this run
    curve_data: GlobalCurveData = field(init=False)

    # --- Layer 0: erosion ---
    accumulation: Grid | None = None
    reductions: list[Grid] = field(default_factory=list)
    bloats: Grid | None = None

    # --- Layer 1: separation ---
    dominant_rows: Grid | None = None
    dominant_columns: Grid | None = None
    curve_candidates: Grid | None = None

    # --- Layer 2: curves ---
    curves: Grid | None = None
    curve_points: Grid | None = None
    curve_summaries: list[CurveSummary] = field(default_factory=list)
    dominant_curves: Grid | None = None
    dominant_points: Grid | None = None
    dominant_summaries: list[CurveSummary] = field(default_factory=list)

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.curve_data = GlobalCurveData(self.source.size)

    @classmethod
    def from_grid(cls, grid: Grid) -> PipelineContext:
        """Context over a copy of ``grid`` with every nonzero cell set to 1."""
        return cls(source=grid.filled_mask())

    @property
    def size(self) -> int:
        return self.source.size

    @property
    def is_blank(self) -> bool:
        return self.source.count_nonzero() == 0

    def require(self, name: str) -> Grid:
        """Intermediate grid ``name``; ValueError if it was never produced."""
        value = getattr(self, name)
        if value is None:
            raise ValueError(f"{name} has not been computed")
        return value
