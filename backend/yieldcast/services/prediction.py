from __future__ import annotations

import math
from typing import Any, Mapping

import structlog
from pydantic import ValidationError

from yieldcast.errors import InvalidRequest, PredictionOutOfRange, YieldcastError
from yieldcast.observability.instrument import upstream_call
from yieldcast.observability.metrics import record_prediction
from yieldcast.schemas.common import utc_timestamp
from yieldcast.schemas.predict import PredictRequest, PredictResponse
from yieldcast.services.prompts import RAINFALL_CONSTRAINTS, build_prompt
from yieldcast.services.providers import PredictionProvider, ProviderFactory
from yieldcast.utils.numeric import within

logger = structlog.get_logger(__name__)

def _valid_rainfall(value: Any) -> bool:
    # bool is an int subclass; NaN and inf fail the bound comparison,
    # and comparing huge ints never overflows
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return within(value, RAINFALL_CONSTRAINTS["MIN"], RAINFALL_CONSTRAINTS["MAX"])


def validate_request(body: Any) -> PredictRequest:
    """
    Check a decoded JSON body before anything talks to a vendor.

    Order of checks: missing fields, rainfall, provider. Raises
    InvalidRequest with the message returned to the client. An empty or
    falsy provider counts as missing; rainfall 0 is a real value.
    """
    if not isinstance(body, Mapping):
        raise InvalidRequest("Request body must be a JSON object")
    if body.get("rainfall") is None or not body.get("provider"):
        raise InvalidRequest("Missing required fields")

    if not _valid_rainfall(body["rainfall"]):
        raise InvalidRequest("Invalid rainfall value")

    try:
        return PredictRequest.model_validate(dict(body))
    except ValidationError as exc:
        bad = {err["loc"][0] for err in exc.errors() if err.get("loc")}
        if "rainfall" in bad:
            raise InvalidRequest("Invalid rainfall value") from None
        raise InvalidRequest("Invalid provider") from None


def predict_yield(request: PredictRequest, provider: PredictionProvider) -> PredictResponse:
    """Make exactly one upstream call and range-check what comes back."""
    prompt = build_prompt(request.rainfall)
    name = request.provider.value
    try:
        with upstream_call(name, model=provider.model, rainfall=request.rainfall):
            reply = provider.predict(prompt)

        low, high = provider.yield_range
        if not math.isfinite(reply.value) or not within(reply.value, low, high):
            logger.warning(
                "prediction.out_of_range",
                provider=name,
                value=reply.value,
                low=low,
                high=high,
            )
            raise PredictionOutOfRange("Invalid prediction value")
    except YieldcastError as exc:
        record_prediction(name, type(exc).__name__)
        raise

    record_prediction(name, "ok")
    return PredictResponse(
        prediction=f"{reply.value:.2f}",
        comment=reply.comment,
        provider=request.provider,
        rainfall=request.rainfall,
        timestamp=utc_timestamp(),
    )


def run_prediction(body: Any, provider_factory: ProviderFactory) -> PredictResponse:
    """Validate, pick the vendor, predict. The factory is only called for valid requests."""
    request = validate_request(body)
    provider = provider_factory(request.provider)
    return predict_yield(request, provider)
