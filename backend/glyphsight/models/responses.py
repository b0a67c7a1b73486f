"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from glyphsight.models.reports import CompatibilityReport
from glyphsight.models.requests import DefinitionModel
from glyphsight.utils.contour import CurveSummary


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0


class CurveModel(BaseModel):
    number: int
    start: int
    closing: int
    midpoint: int
    point_count: int
    dominant: bool = False

    @classmethod
    def from_summary(cls, summary: CurveSummary) -> CurveModel:
        return cls(
            number=summary.number,
            start=summary.start,
            closing=summary.closing,
            midpoint=summary.midpoint,
            point_count=summary.point_count,
            dominant=summary.dominant,
        )


class AnalyzeResponse(BaseModel):
    size: int
    # Intermediate grids as digit text; empty when the transform was skipped
    grids: dict[str, str] = Field(default_factory=dict)
    curves: list[CurveModel] = Field(default_factory=list)
    processing_time_ms: float = 0.0
    transforms_completed: int = 0
    transforms_failed: int = 0
    errors: dict[str, str] = Field(default_factory=dict)


class ReportModel(BaseModel):
    trace_within_range: bool
    reconstructed: bool
    timing_rating: float
    vectors_similarity: float
    offsets_similarity: float
    diagnosis: bool
    reconstruction_log: list[str] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: CompatibilityReport) -> ReportModel:
        return cls(
            trace_within_range=report.trace_within_range,
            reconstructed=report.reconstructed,
            timing_rating=report.timing_rating,
            vectors_similarity=report.vectors_similarity,
            offsets_similarity=report.offsets_similarity,
            diagnosis=report.diagnosis,
            reconstruction_log=list(report.reconstruction_log),
        )


class TrainResponse(BaseModel):
    definition: DefinitionModel
    definition_map: str = ""
    reports: list[ReportModel] = Field(default_factory=list)
    valid_instances: list[int] = Field(default_factory=list)


class PredictionModel(BaseModel):
    id: str
    likeness: float


class PredictResponse(BaseModel):
    predictions: list[PredictionModel] = Field(default_factory=list)
    current_best: str | None = None
