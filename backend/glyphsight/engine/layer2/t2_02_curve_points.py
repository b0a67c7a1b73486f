"""T2.02: Curve points.

Number the points of every outline in walking order and flag where each
curve closes.
"""

from __future__ import annotations

from glyphsight.engine.context import PipelineContext
from glyphsight.engine.registry import Layer, transform
from glyphsight.utils.contour import mark_curve_points


@transform(
    id="T2.02",
    layer=Layer.CURVES,
    dependencies=["T2.01"],
    tags={"needs_ink"},
    description="Order outline points and flag closing points",
)
def curve_points(ctx: PipelineContext) -> None:
    ctx.curve_points, ctx.curve_summaries = mark_curve_points(
        ctx.curve_data, ctx.require("curves"), dominant=False
    )
