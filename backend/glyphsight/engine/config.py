"""Pipeline configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from glyphsight.constants import MAXIMUM_REDUCTIONS


@dataclass
class PipelineConfig:
    """Knobs of the raster pipeline."""

    # Erosion stops once the round counter (starting at 1) reaches this
    max_reductions: int = MAXIMUM_REDUCTIONS
    # Shortest row or column run kept as a dominant stroke
    minimum_run_length: int = 8
    # When set, every erosion round is written here as text
    reductions_dir: Path | None = None
    # Skip every transform that needs ink when the input grid is empty
    skip_blank: bool = True
