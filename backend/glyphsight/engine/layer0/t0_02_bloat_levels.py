"""T0.02: Bloat levels.

For every filled cell, the widest square ring around it that stays filled.
"""

from __future__ import annotations

from glyphsight.engine.context import PipelineContext
from glyphsight.engine.registry import Layer, transform
from glyphsight.utils.morphology import write_bloats


@transform(
    id="T0.02",
    layer=Layer.EROSION,
    description="Widest filled ring around every cell",
)
def bloat_levels(ctx: PipelineContext) -> None:
    ctx.bloats = write_bloats(ctx.source)
