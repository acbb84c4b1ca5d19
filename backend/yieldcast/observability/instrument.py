from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

import structlog

from .metrics import UPSTREAM_LATENCY

logger = structlog.get_logger("upstream")


@contextmanager
def upstream_call(provider: str, **fields) -> Iterator[None]:
    """Time one vendor call and emit structured start/completed/error logs."""
    start = time.perf_counter()
    logger.info("upstream.start", provider=provider, **fields)
    try:
        yield
    except Exception as exc:
        duration = (time.perf_counter() - start) * 1000
        UPSTREAM_LATENCY.labels(provider=provider).observe(duration / 1000)
        logger.warning(
            "upstream.error",
            provider=provider,
            duration_ms=round(duration, 2),
            exc_type=type(exc).__name__,
            error=str(exc),
        )
        raise
    duration = (time.perf_counter() - start) * 1000
    UPSTREAM_LATENCY.labels(provider=provider).observe(duration / 1000)
    logger.info("upstream.completed", provider=provider, duration_ms=round(duration, 2))
