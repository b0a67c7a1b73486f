"""Transform registry for the raster pipeline.

Each transform is a plain function over the PipelineContext, registered once
at import time:

    @transform(id="T1.01", layer=Layer.SEPARATION, dependencies=["T0.01"])
    def dominant_rows(ctx: PipelineContext) -> None:
        ctx.dominant_rows = recurrent_trace(ctx.require("accumulation"), 8)

New transforms only need a module under ``engine/layerN``.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from glyphsight.engine.context import PipelineContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    EROSION = 0
    SEPARATION = 1
    CURVES = 2


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["PipelineContext"], None]
    dependencies: list[str] = field(default_factory=list)
    tags: set[str] = field(default_factory=set)
    description: str = ""


class TransformRegistry:
    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        return sorted((s for s in self._transforms.values() if s.layer == layer), key=lambda s: s.id)

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.layer, s.id))

    def with_tag(self, tag: str) -> list[TransformSpec]:
        return [s for s in self.all() if tag in s.tags]

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Dependency order over ``requested_ids`` (all transforms when None).

        Requested transforms pull in their dependencies. Among transforms that
        are ready at the same time the lowest ID runs first.

        Raises ValueError on a dependency cycle.
        """
        pool = self._transforms
        if requested_ids is not None:
            needed: set[str] = set()
            pending = list(requested_ids)
            while pending:
                tid = pending.pop()
                if tid in needed or tid not in pool:
                    continue
                needed.add(tid)
                pending.extend(pool[tid].dependencies)
            pool = {tid: spec for tid, spec in pool.items() if tid in needed}

        waiting_on = {tid: sum(dep in pool for dep in spec.dependencies) for tid, spec in pool.items()}
        dependents: dict[str, list[str]] = {tid: [] for tid in pool}
        for tid, spec in pool.items():
            for dep in spec.dependencies:
                if dep in pool:
                    dependents[dep].append(tid)

        ready = [tid for tid, count in waiting_on.items() if count == 0]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []
        while ready:
            tid = heapq.heappop(ready)
            ordered.append(pool[tid])
            for other in dependents[tid]:
                waiting_on[other] -= 1
                if waiting_on[other] == 0:
                    heapq.heappush(ready, other)

        if len(ordered) != len(pool):
            stuck = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {sorted(stuck)}")
        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    tags: set[str] | None = None,
    description: str = "",
):
    """Register the decorated function in the global registry."""

    def decorator(fn: Callable[["PipelineContext"], None]):
        _registry.register(
            TransformSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=dependencies or [],
                tags=tags or set(),
                description=description,
            )
        )
        return fn

    return decorator
