from __future__ import annotations

from typing import Iterable

import plotly.graph_objects as go

from yieldcast.schemas.predict import HISTORICAL, Provider

from .history import PredictionPoint

PROVIDER_STYLE = {
    Provider.OPENAI.value: ("OpenAI", "#0f172a"),
    Provider.ANTHROPIC.value: ("Anthropic", "#d97757"),
    Provider.LLAMA.value: ("Llama", "#dc2626"),
    Provider.DEEPSEEK.value: ("DeepSeek", "#2563eb"),
    HISTORICAL: ("Historical", "#94a3b8"),
}

_LAYOUT = {
    "template": "plotly_white",
    "height": 380,
    "margin": {"l": 60, "r": 20, "t": 30, "b": 50},
    "xaxis": {"title": {"text": "Rainfall (mm)"}},
    "yaxis": {"title": {"text": "Yield (metric tons/hectare)"}, "rangemode": "tozero"},
    "legend": {"orientation": "h", "y": 1.12},
    "hovermode": "closest",
}


def provider_label(provider: str) -> str:
    return PROVIDER_STYLE.get(provider, (provider.title(), None))[0]


def build_figure(points: Iterable[PredictionPoint]) -> go.Figure:
    """Rainfall vs. yield, one scatter+line trace per provider."""
    plottable = [p for p in points if p.plottable]
    fig = go.Figure()
    for provider, (label, color) in PROVIDER_STYLE.items():
        series = sorted((p for p in plottable if p.provider == provider), key=lambda p: p.rainfall)
        if not series:
            continue
        fig.add_trace(
            go.Scatter(
                x=[p.rainfall for p in series],
                y=[p.yield_ for p in series],
                mode="lines+markers",
                name=label,
                marker={"color": color, "size": 9},
                line={"color": color, "width": 1.5},
                customdata=[[p.comment or "", p.timestamp] for p in series],
                hovertemplate=(
                    "Rainfall: %{x}mm<br>"
                    "Yield: %{y:.2f} metric tons/hectare<br>"
                    f"{label}<br>"
                    "%{customdata[0]}<extra></extra>"
                ),
            )
        )
    fig.update_layout(**_LAYOUT)
    return fig
