"""POST /api/predict: rank known definitions against incoming strokes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from glyphsight.config import Settings
from glyphsight.dependencies import get_settings
from glyphsight.learning.database import LivingDataUnit
from glyphsight.learning.medium import Medium
from glyphsight.models.requests import PredictRequest
from glyphsight.models.responses import PredictionModel, PredictResponse

router = APIRouter()


@router.post("/predict", response_model=PredictResponse)
async def predict(req: PredictRequest, settings: Settings = Depends(get_settings)) -> PredictResponse:
    resolution = req.resolution or settings.default_resolution
    try:
        strokes = [stroke.to_trace(resolution) for stroke in req.strokes]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    data_unit = LivingDataUnit.from_definitions([d.to_definition() for d in req.definitions])
    medium = Medium(data_unit)
    for stroke in strokes:
        medium.feed_trace(stroke)

    ids, values = medium.get_list_of_predictions()
    return PredictResponse(
        predictions=[PredictionModel(id=i, likeness=v) for i, v in zip(ids, values)],
        current_best=medium.current_best,
    )
