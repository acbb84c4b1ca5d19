"""
Fixed prompt templates for the Malawi maize yield question.

Every provider gets the same two strings; only the rainfall figure varies.
The constants double as request/response bounds in the prediction service.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

# mm of rainfall per year
RAINFALL_CONSTRAINTS = {
    "MIN": 0,
    "MAX": 5000,
    "OPTIMAL_LOW": 800,
    "OPTIMAL_HIGH": 1200,
    "TYPICAL_LOW": 725,
    "TYPICAL_HIGH": 2500,
}

# metric tons per hectare
YIELD_CONSTRAINTS = {
    "MIN": 0,
    "MAX": 10,
    "TYPICAL_LOW": 1,
    "TYPICAL_HIGH": 4,
}


@dataclass(frozen=True)
class Prompt:
    system: str
    user: str


_SYSTEM_TEMPLATE = """You are an AI specialized in Malawian agriculture. Consider these facts:
- Malawi's typical annual rainfall ranges from {typical_low}mm to {typical_high}mm
- Main crops include maize, tobacco, tea, and sugarcane
- Typical maize yields range from {yield_low} to {yield_high} metric tons per hectare depending on conditions
- Rainfall is a critical factor in determining yield
Provide numeric predictions in metric tons per hectare based on rainfall data, followed by a brief comment explaining the prediction."""

_USER_TEMPLATE = """Given an annual rainfall of {rainfall}mm in Malawi, predict the farm yield in metric tons per hectare. Consider:
1. If rainfall is below {typical_low}mm, yields are severely impacted
2. If rainfall is above {typical_high}mm, flooding may reduce yields
3. Optimal rainfall is between {optimal_low}-{optimal_high}mm
Respond with a numeric prediction followed by a brief explanation."""


def build_prompt(rainfall: float) -> Prompt:
    system = _SYSTEM_TEMPLATE.format(
        typical_low=RAINFALL_CONSTRAINTS["TYPICAL_LOW"],
        typical_high=RAINFALL_CONSTRAINTS["TYPICAL_HIGH"],
        yield_low=YIELD_CONSTRAINTS["TYPICAL_LOW"],
        yield_high=YIELD_CONSTRAINTS["TYPICAL_HIGH"],
    )
    user = _USER_TEMPLATE.format(
        rainfall=_format_rainfall(rainfall),
        typical_low=RAINFALL_CONSTRAINTS["TYPICAL_LOW"],
        typical_high=RAINFALL_CONSTRAINTS["TYPICAL_HIGH"],
        optimal_low=RAINFALL_CONSTRAINTS["OPTIMAL_LOW"],
        optimal_high=RAINFALL_CONSTRAINTS["OPTIMAL_HIGH"],
    )
    return Prompt(system=system, user=user)


def _format_rainfall(rainfall: float) -> str:
    # 900.0 -> "900", 912.5 -> "912.5"
    if float(rainfall).is_integer():
        return str(int(rainfall))
    return repr(float(rainfall))


PREDICT_YIELD_FUNCTION: Dict[str, Any] = {
    "name": "predict_yield",
    "description": "Predict farm yield based on rainfall",
    "parameters": {
        "type": "object",
        "properties": {
            "yield": {
                "type": "number",
                "description": "Predicted yield in metric tons per hectare",
            },
            "comment": {
                "type": "string",
                "description": "Brief explanation of the prediction",
            },
        },
        "required": ["yield", "comment"],
    },
}
