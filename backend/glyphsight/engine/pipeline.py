"""Pipeline orchestrator: runs transforms in dependency order with adaptive gating."""

from __future__ import annotations

import logging
import time
from collections.abc import Generator
from typing import Any

from glyphsight.engine.config import PipelineConfig
from glyphsight.engine.context import PipelineContext
from glyphsight.engine.registry import Layer, TransformRegistry, TransformSpec, get_registry

logger = logging.getLogger(__name__)

NEEDS_INK = "needs_ink"


class Pipeline:
    """Orchestrates the transform pipeline."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def _queue(self, ctx: PipelineContext) -> tuple[list[TransformSpec], set[str]]:
        ctx.config = self.config
        skip_ids = self._adaptive_gate(ctx)
        requested = {s.id for s in self.registry.all()} - skip_ids
        return self.registry.resolve_order(requested), skip_ids

    def _apply(self, spec: TransformSpec, ctx: PipelineContext) -> str:
        """Run one transform, recording failures on the context. Returns the error text."""
        try:
            spec.fn(ctx)
        except Exception as e:
            ctx.errors[spec.id] = str(e)
            logger.warning("  %s FAILED: %s", spec.id, e)
            return str(e)
        ctx.completed_transforms.add(spec.id)
        return ""

    def run(self, ctx: PipelineContext) -> PipelineContext:
        """Run the full pipeline on the given context."""
        start = time.perf_counter()
        ordered, skip_ids = self._queue(ctx)

        logger.info(
            "Pipeline: %d transforms queued (%d skipped) on a %dx%d grid",
            len(ordered),
            len(skip_ids),
            ctx.size,
            ctx.size,
        )

        for spec in ordered:
            t0 = time.perf_counter()
            if not self._apply(spec, ctx):
                logger.debug("  %s completed in %.1fms", spec.id, (time.perf_counter() - t0) * 1000)

        logger.info(
            "Pipeline complete: %d/%d transforms in %.0fms",
            len(ctx.completed_transforms),
            len(ordered),
            (time.perf_counter() - start) * 1000,
        )
        return ctx

    def run_streaming(self, ctx: PipelineContext) -> Generator[dict[str, Any], None, None]:
        """Run the pipeline, yielding a progress dict after each transform.

        ``ctx`` is mutated in place, so once the generator is exhausted it
        holds the same results ``run()`` would have produced.
        """
        ordered, _ = self._queue(ctx)
        total = len(ordered)

        for i, spec in enumerate(ordered):
            t0 = time.perf_counter()
            error = self._apply(spec, ctx)
            yield {
                "transform_id": spec.id,
                "description": spec.description,
                "layer": spec.layer.name,
                "index": i,
                "total": total,
                "elapsed_ms": round((time.perf_counter() - t0) * 1000, 1),
                "status": "error" if error else "ok",
                "error": error,
            }

    def run_layer(self, ctx: PipelineContext, layer: Layer) -> PipelineContext:
        """Run only transforms in a specific layer."""
        ctx.config = self.config
        for spec in self.registry.get_layer(layer):
            self._apply(spec, ctx)
        return ctx

    def _adaptive_gate(self, ctx: PipelineContext) -> set[str]:
        """Transforms to skip for this input.

        A blank grid has nothing to separate or trace, so only the erosion
        layer runs on it.
        """
        skip: set[str] = set()
        if self.config.skip_blank and ctx.is_blank:
            skip.update(s.id for s in self.registry.with_tag(NEEDS_INK))
            logger.info("Blank input: skipping %d transforms", len(skip))
        return skip


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline(config=config)
