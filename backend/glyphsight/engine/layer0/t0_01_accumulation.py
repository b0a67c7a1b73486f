"""T0.01: Accumulation.

Erode the input until no two filled cells remain side by side and sum the
rounds. Thick regions score high, thin strokes score 1 or nothing.
"""

from __future__ import annotations

from glyphsight.engine.context import PipelineContext
from glyphsight.engine.registry import Layer, transform
from glyphsight.utils.morphology import get_accumulation


@transform(
    id="T0.01",
    layer=Layer.EROSION,
    description="Sum repeated corner erosions into a heat map",
)
def accumulation(ctx: PipelineContext) -> None:
    ctx.accumulation, ctx.reductions = get_accumulation(
        ctx.source,
        max_reductions=ctx.config.max_reductions,
        output_dir=ctx.config.reductions_dir,
    )
