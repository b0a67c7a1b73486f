"""POST /api/train: majority-vote training of one definition."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from glyphsight.config import Settings
from glyphsight.dependencies import get_settings
from glyphsight.learning.database import LivingDataUnit
from glyphsight.learning.training import train_w_report
from glyphsight.models.definition import TrainingUnit
from glyphsight.models.requests import DefinitionModel, TrainRequest
from glyphsight.models.responses import ReportModel, TrainResponse
from glyphsight.text.serializer import definition_to_text

router = APIRouter()


@router.post("/train", response_model=TrainResponse)
async def train(req: TrainRequest, settings: Settings = Depends(get_settings)) -> TrainResponse:
    margin = req.error_margin if req.error_margin is not None else settings.training_error_margin
    unit = TrainingUnit(
        base=req.base.to_definition(),
        training_instances=[instance.to_definition() for instance in req.instances],
        error_margin=margin,
    )

    try:
        trained = train_w_report(unit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    if req.save_as:
        try:
            LivingDataUnit.from_definitions([trained]).dump_to_file(settings.data_dir, req.save_as)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

    return TrainResponse(
        definition=DefinitionModel.from_definition(trained),
        definition_map=definition_to_text(trained),
        reports=[ReportModel.from_report(r) for r in unit.reports],
        valid_instances=unit.valid_instances,
    )
