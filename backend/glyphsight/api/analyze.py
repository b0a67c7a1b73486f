"""POST /api/analyze: run the raster pipeline over one grid."""

from __future__ import annotations

import time

from fastapi import APIRouter, HTTPException

from glyphsight.engine.config import PipelineConfig
from glyphsight.engine.context import PipelineContext
from glyphsight.engine.pipeline import create_pipeline
from glyphsight.models.requests import AnalyzeRequest
from glyphsight.models.responses import AnalyzeResponse, CurveModel
from glyphsight.text.parser import text_to_grid
from glyphsight.text.serializer import grid_to_text

router = APIRouter()

_REPORTED_GRIDS = (
    "accumulation",
    "bloats",
    "dominant_rows",
    "dominant_columns",
    "curve_candidates",
    "curves",
    "curve_points",
    "dominant_curves",
    "dominant_points",
)


def _config_for(req: AnalyzeRequest) -> PipelineConfig:
    config = PipelineConfig()
    if req.max_reductions is not None:
        config.max_reductions = req.max_reductions
    if req.minimum_run_length is not None:
        config.minimum_run_length = req.minimum_run_length
    return config


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(req: AnalyzeRequest) -> AnalyzeResponse:
    start = time.perf_counter()

    try:
        grid = text_to_grid(req.grid, req.size)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    ctx = create_pipeline(_config_for(req)).run(PipelineContext.from_grid(grid))

    elapsed = (time.perf_counter() - start) * 1000

    grids = {}
    for name in _REPORTED_GRIDS:
        value = getattr(ctx, name)
        grids[name] = grid_to_text(value) if value is not None else ""

    return AnalyzeResponse(
        size=ctx.size,
        grids=grids,
        curves=[CurveModel.from_summary(s) for s in ctx.curve_summaries + ctx.dominant_summaries],
        processing_time_ms=round(elapsed, 1),
        transforms_completed=len(ctx.completed_transforms),
        transforms_failed=len(ctx.errors),
        errors=ctx.errors,
    )
