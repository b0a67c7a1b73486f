"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from glyphsight.api import analyze, health, predict, train

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(analyze.router)
api_router.include_router(train.router)
api_router.include_router(predict.router)
