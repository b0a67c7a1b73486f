"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from glyphsight.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.glyphsight_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="GlyphSight",
        description="Raster glyph analysis: erosion, curve tracing and trace training",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all transform modules to trigger registration
    register_transforms()

    from glyphsight.api.router import api_router

    app.include_router(api_router)

    return app


def register_transforms() -> None:
    """Import every transform module so the @transform decorators fire."""
    import importlib
    import pkgutil

    for layer_name in ["layer0", "layer1", "layer2"]:
        package = importlib.import_module(f"glyphsight.engine.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")


app = create_app()
