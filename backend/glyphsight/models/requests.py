"""API request models."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, model_validator

from glyphsight.models.definition import DefinitionUnit, Trace

# Ids end up in snapshot lines, where ".", ";" and "," are separators
DEFINITION_ID_PATTERN = r"^[^.;,\s]+$"


def _check_indexes(traces: list[TraceModel], resolution: int) -> None:
    cell_count = resolution * resolution
    for trace in traces:
        for index in trace.indexes:
            if index >= cell_count:
                raise ValueError(f"Index {index} is outside the {resolution}x{resolution} grid")


class TraceModel(BaseModel):
    time_stamp: int = Field(..., ge=0, description="Time step the stroke was drawn at")
    indexes: list[Annotated[int, Field(ge=0)]] = Field(
        ..., min_length=1, description="Flat grid indexes in drawing order"
    )

    def to_trace(self, resolution: int) -> Trace:
        return Trace.new(self.time_stamp, self.indexes, resolution)


class DefinitionModel(BaseModel):
    id: str = Field(..., pattern=DEFINITION_ID_PATTERN, description="Label of the pattern")
    resolution: int = Field(..., gt=0, description="Row size of the grid the indexes address")
    traces: list[TraceModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def indexes_fit_grid(self) -> DefinitionModel:
        _check_indexes(self.traces, self.resolution)
        return self

    def to_definition(self) -> DefinitionUnit:
        definition = DefinitionUnit(resolution=self.resolution, id=self.id)
        for trace in self.traces:
            definition.feed(trace.time_stamp, trace.indexes)
        return definition

    @classmethod
    def from_definition(cls, definition: DefinitionUnit) -> DefinitionModel:
        return cls(
            id=definition.id,
            resolution=definition.resolution,
            traces=[TraceModel(time_stamp=t.time_stamp, indexes=t.indexes) for t in definition.traces],
        )


class AnalyzeRequest(BaseModel):
    grid: str = Field(..., description="Grid as digit text, one row per line")
    size: int | None = Field(default=None, gt=0, description="Row size; inferred from the line count when omitted")
    max_reductions: int | None = Field(default=None, gt=1, description="Override for the erosion round limit")
    minimum_run_length: int | None = Field(default=None, gt=0, description="Override for the dominant run length")


class TrainRequest(BaseModel):
    base: DefinitionModel
    instances: list[DefinitionModel] = Field(default_factory=list)
    error_margin: float | None = Field(default=None, ge=0.0, le=1.0)
    save_as: str | None = Field(
        default=None,
        pattern=r"^[A-Za-z0-9_-]+$",
        description="Snapshot name for the trained definition under the data directory",
    )


class PredictRequest(BaseModel):
    definitions: list[DefinitionModel] = Field(..., min_length=1)
    strokes: list[TraceModel] = Field(..., min_length=1, description="Strokes fed in order")
    resolution: int | None = Field(
        default=None, gt=0, description="Row size of the strokes; the configured default when omitted"
    )

    @model_validator(mode="after")
    def strokes_fit_grid(self) -> PredictRequest:
        if self.resolution is not None:
            _check_indexes(self.strokes, self.resolution)
        return self
