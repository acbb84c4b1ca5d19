"""
Best-effort extraction of a yield figure from an LLM reply.

Vendors are asked for "a number followed by a comment" but nothing holds
them to it, so every path here either returns a ProviderReply or raises
UpstreamParseError. Range checking is left to the prediction service.
"""
from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from yieldcast.errors import UpstreamParseError
from yieldcast.utils.numeric import coerce_float

_NUMBER = r"(?<![\w.])(-?\d+(?:\.\d+)?|-?\.\d+)"

# "2.8 metric tons per hectare", "2.8 t/ha", "2.8 tonnes/hectare"
_WITH_UNIT = re.compile(
    _NUMBER
    + r"\s*(?:metric\s+)?(?:t/ha|tons?|tonnes?|mt)(?:\s*(?:per|/)\s*(?:hectare|ha))?\b",
    re.IGNORECASE,
)
_BARE = re.compile(_NUMBER)
_LEADING_NOISE = re.compile(r"^[\s.,:;\-\u2013\u2014)]+")


@dataclass(frozen=True)
class ProviderReply:
    value: float
    comment: Optional[str] = None


def parse_prediction_text(text: Optional[str]) -> ProviderReply:
    """
    Pull the predicted yield and the trailing explanation out of free text.

    A number carrying a yield unit wins over the first bare number, so a reply
    that echoes the rainfall ("With 900mm, expect 2.8 t/ha ...") still parses.
    """
    if not text or not text.strip():
        raise UpstreamParseError("Empty response from provider")

    match = _WITH_UNIT.search(text) or _BARE.search(text)
    if match is None:
        raise UpstreamParseError("No numeric prediction found in provider response")

    value = float(match.group(1))
    comment = _LEADING_NOISE.sub("", text[match.end():]).strip()
    return ProviderReply(value=value, comment=comment or None)


def parse_function_arguments(arguments: Any) -> ProviderReply:
    """Decode ``predict_yield`` call arguments (JSON string or mapping)."""
    if isinstance(arguments, (str, bytes)):
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError as exc:
            raise UpstreamParseError(f"Malformed function call arguments: {exc.msg}") from exc

    if not isinstance(arguments, Mapping):
        raise UpstreamParseError("Function call arguments are not an object")

    raw = arguments.get("yield")
    value = None if isinstance(raw, bool) else coerce_float(raw)
    if value is None or math.isnan(value):
        raise UpstreamParseError("Function call did not return a numeric yield")

    comment = arguments.get("comment")
    if comment is not None:
        comment = str(comment).strip() or None
    return ProviderReply(value=value, comment=comment)
