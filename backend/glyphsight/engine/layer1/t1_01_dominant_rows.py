"""T1.01: Dominant rows.

Long horizontal runs of the accumulation are straight strokes, not curves.
"""

from __future__ import annotations

from glyphsight.engine.context import PipelineContext
from glyphsight.engine.registry import Layer, transform
from glyphsight.utils.morphology import recurrent_trace


@transform(
    id="T1.01",
    layer=Layer.SEPARATION,
    dependencies=["T0.01"],
    tags={"needs_ink"},
    description="Keep horizontal runs of the accumulation",
)
def dominant_rows(ctx: PipelineContext) -> None:
    ctx.dominant_rows = recurrent_trace(ctx.require("accumulation"), ctx.config.minimum_run_length)
