"""T1.02: Dominant columns.

Same run filter as T1.01, applied to the transposed accumulation and turned
back to the original orientation.
"""

from __future__ import annotations

from glyphsight.engine.context import PipelineContext
from glyphsight.engine.registry import Layer, transform
from glyphsight.utils.morphology import recurrent_trace


@transform(
    id="T1.02",
    layer=Layer.SEPARATION,
    dependencies=["T0.01"],
    tags={"needs_ink"},
    description="Keep vertical runs of the accumulation",
)
def dominant_columns(ctx: PipelineContext) -> None:
    columns = recurrent_trace(
        ctx.require("accumulation").transposed_copy(),
        ctx.config.minimum_run_length,
    )
    columns.transpose()
    ctx.dominant_columns = columns
