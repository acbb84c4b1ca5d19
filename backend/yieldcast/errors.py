"""Error taxonomy shared by the services and the routers.

Client input problems map to 4xx, anything that goes wrong on or after the
upstream LLM call maps to 5xx. Routers read ``status_code`` and surface
``message`` verbatim.
"""
from __future__ import annotations


class YieldcastError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequest(YieldcastError):
    status_code = 400


class CsvFormatError(YieldcastError):
    status_code = 400


class UpstreamError(YieldcastError):
    status_code = 500


class UpstreamCallError(UpstreamError):
    """The vendor SDK call itself failed."""


class ProviderNotConfigured(UpstreamCallError):
    """No API key is configured for the selected vendor."""


class UpstreamParseError(UpstreamError):
    """The vendor replied but no prediction could be read from the reply."""


class PredictionOutOfRange(UpstreamError):
    """The parsed prediction is outside the provider's plausible yield range."""


__all__ = [
    "YieldcastError",
    "InvalidRequest",
    "CsvFormatError",
    "UpstreamError",
    "UpstreamCallError",
    "ProviderNotConfigured",
    "UpstreamParseError",
    "PredictionOutOfRange",
]
