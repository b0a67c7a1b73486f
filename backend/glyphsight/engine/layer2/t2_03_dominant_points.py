"""T2.03: Dominant points.

Outline the union of dominant rows and columns and number it after the
curves of T2.02, so every curve of the run gets a distinct number.
"""

from __future__ import annotations

import numpy as np

from glyphsight.engine.context import PipelineContext
from glyphsight.engine.registry import Layer, transform
from glyphsight.utils.contour import get_curves, mark_curve_points
from glyphsight.utils.grid import Grid


@transform(
    id="T2.03",
    layer=Layer.CURVES,
    dependencies=["T1.01", "T1.02", "T2.02"],
    tags={"needs_ink"},
    description="Outline dominant strokes and flag their closing points",
)
def dominant_points(ctx: PipelineContext) -> None:
    rows = ctx.require("dominant_rows")
    columns = ctx.require("dominant_columns")
    dominant = Grid(ctx.size, np.maximum(rows.data, columns.data))

    ctx.dominant_curves = get_curves(ctx.curve_data, dominant)
    ctx.dominant_points, ctx.dominant_summaries = mark_curve_points(
        ctx.curve_data, ctx.dominant_curves, dominant=True
    )
