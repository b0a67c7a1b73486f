"""T2.01: Closed curves.

Outline every region of curve candidates with 2 and hollow its inside.
"""

from __future__ import annotations

from glyphsight.engine.context import PipelineContext
from glyphsight.engine.registry import Layer, transform
from glyphsight.utils.contour import get_curves


@transform(
    id="T2.01",
    layer=Layer.CURVES,
    dependencies=["T1.03"],
    tags={"needs_ink"},
    description="Outline every curve candidate region",
)
def closed_curves(ctx: PipelineContext) -> None:
    ctx.curves = get_curves(ctx.curve_data, ctx.require("curve_candidates"))
