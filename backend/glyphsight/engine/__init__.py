"""GlyphSight raster transform engine."""

from glyphsight.engine.registry import transform, Layer, get_registry
from glyphsight.engine.context import PipelineContext
from glyphsight.engine.pipeline import Pipeline, create_pipeline

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "PipelineContext",
    "Pipeline",
    "create_pipeline",
]
