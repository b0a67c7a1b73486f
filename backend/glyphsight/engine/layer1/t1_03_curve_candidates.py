"""T1.03: Curve candidates.

Whatever survives erosion but belongs to neither a dominant row nor a
dominant column.
"""

from __future__ import annotations

from glyphsight.engine.context import PipelineContext
from glyphsight.engine.registry import Layer, transform


@transform(
    id="T1.03",
    layer=Layer.SEPARATION,
    dependencies=["T0.01", "T1.01", "T1.02"],
    tags={"needs_ink"},
    description="Accumulation minus dominant rows and columns",
)
def curve_candidates(ctx: PipelineContext) -> None:
    without_rows = ctx.require("accumulation").xat(ctx.require("dominant_rows"))
    ctx.curve_candidates = without_rows.xat(ctx.require("dominant_columns"))
