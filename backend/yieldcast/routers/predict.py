from __future__ import annotations

import json
from functools import partial

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from yieldcast.config import get_settings
from yieldcast.errors import YieldcastError
from yieldcast.schemas.common import predict_error
from yieldcast.services.prediction import run_prediction
from yieldcast.services.providers import ProviderFactory, build_provider

router = APIRouter(prefix="/api/predict", tags=["predict"])
logger = structlog.get_logger(__name__)


def get_provider_factory() -> ProviderFactory:
    """Dependency hook; tests swap in fake providers here."""
    return partial(build_provider, settings=get_settings())


@router.post("")
async def predict(
    request: Request,
    provider_factory: ProviderFactory = Depends(get_provider_factory),
):
    """
    Ask one LLM vendor for a maize yield prediction at the given rainfall.

    Body: ``{"rainfall": number, "provider": "openai"|"anthropic"|"llama"|"deepseek"}``

    Status rules:
      - 200 ``{prediction, comment?, provider, rainfall, timestamp}``
      - 400 ``{error}`` for bad input; no vendor is contacted
      - 500 ``{error}`` when the vendor call, reply parsing or range check fails
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return predict_error("Request body must be valid JSON", status_code=400)

    try:
        # vendor SDKs are blocking; keep them off the event loop
        result = await run_in_threadpool(run_prediction, body, provider_factory)
    except YieldcastError as exc:
        if exc.status_code >= 500:
            logger.error("predict.failed", error=exc.message, exc_type=type(exc).__name__)
        else:
            logger.info("predict.rejected", error=exc.message)
        return predict_error(exc.message, status_code=exc.status_code)

    return JSONResponse(content=result.to_payload())
