# yieldcast/main.py
"""
Rainfall -> yield prediction API.

Run with:
    uvicorn yieldcast.main:app --reload --port 8000
"""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from yieldcast import __version__
from yieldcast.config import get_settings
from yieldcast.observability.logging import configure_logging
from yieldcast.observability.metrics import router as observability_router
from yieldcast.observability.middleware import register_request_middleware, unhandled_exception_handler
from yieldcast.routers.health import router as health_router
from yieldcast.routers.predict import router as predict_router
from yieldcast.routers.upload import router as upload_router

configure_logging()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Rainfall Yield Predictor", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        max_age=86400,
    )

    register_request_middleware(app)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # No auth: every route is public
    app.include_router(health_router)
    app.include_router(observability_router)
    app.include_router(predict_router)
    app.include_router(upload_router)

    return app


app = create_app()
