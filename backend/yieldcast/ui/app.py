"""
Malawi farm yield predictor: browser UI.

Run with:
    streamlit run backend/yieldcast/ui/app.py

Talks to the API at ``API_BASE_URL``. All history lives in this tab's
session state and disappears when the tab closes.
"""
from __future__ import annotations

import hashlib
from typing import Optional

import pandas as pd
import streamlit as st

from yieldcast.config import get_settings
from yieldcast.schemas.predict import Provider
from yieldcast.services.prompts import RAINFALL_CONSTRAINTS
from yieldcast.ui.chart import build_figure, provider_label
from yieldcast.ui.client import ApiClient, ApiError
from yieldcast.ui.history import HistoryState, PredictionPoint

_STATE_KEY = "history"


def validate_rainfall(rainfall: float) -> Optional[str]:
    """Client-side bound check; returns the message to show, or None."""
    if rainfall < RAINFALL_CONSTRAINTS["MIN"]:
        return "Rainfall cannot be negative"
    if rainfall > RAINFALL_CONSTRAINTS["MAX"]:
        return "Please enter a realistic rainfall value (less than 5000mm)"
    return None


def upload_file_id(name: str, content: bytes) -> str:
    # the uploader widget keeps its value across reruns; only new files are sent
    return f"{name}:{len(content)}:{hashlib.sha1(content).hexdigest()}"


def submit_prediction(state: HistoryState, client: ApiClient, rainfall: float, provider: str) -> HistoryState:
    problem = validate_rainfall(rainfall)
    if problem:
        raise ApiError(problem)
    payload = client.predict(rainfall, provider)
    return state.record_prediction(PredictionPoint.from_prediction(payload))


def submit_upload(state: HistoryState, client: ApiClient, name: str, content: bytes) -> HistoryState:
    file_id = upload_file_id(name, content)
    if state.has_uploaded(file_id):
        return state
    rows = client.upload(name, content)
    return state.record_upload(file_id, rows)


@st.cache_resource
def _client(base_url: str) -> ApiClient:
    return ApiClient(base_url)


def _render_latest(point: PredictionPoint) -> None:
    with st.container(border=True):
        st.subheader("Latest Prediction")
        st.metric(
            f"{provider_label(point.provider)} · based on {point.rainfall:g}mm annual rainfall",
            f"{point.yield_:.2f} metric tons/hectare",
        )
        if point.comment:
            st.write(point.comment)


def _render_history(state: HistoryState) -> None:
    st.subheader("Prediction History")
    st.plotly_chart(build_figure(state.points), use_container_width=True)
    frame = pd.DataFrame(state.records())
    st.dataframe(frame, hide_index=True, use_container_width=True)


def main() -> None:
    st.set_page_config(page_title="Malawi Farm Yield Predictor", page_icon="💧", layout="centered")
    st.title("Malawi Farm Yield Predictor")
    st.caption(
        "Enter rainfall data or upload a CSV file to predict farm yield using AI. "
        "The model considers Malawi's typical rainfall patterns and agricultural conditions."
    )

    if _STATE_KEY not in st.session_state:
        st.session_state[_STATE_KEY] = HistoryState()
    state: HistoryState = st.session_state[_STATE_KEY]
    client = _client(get_settings().API_BASE_URL)
    error: Optional[str] = None

    with st.form("predict"):
        col_rain, col_provider = st.columns([2, 1])
        rainfall = col_rain.number_input(
            "Annual rainfall (mm)",
            value=900.0,
            step=1.0,
        )
        col_rain.caption("Typical range: 725mm - 2,500mm annually")
        provider = col_provider.selectbox(
            "AI provider",
            Provider.names(),
            format_func=provider_label,
        )
        submitted = st.form_submit_button("Predict Yield", type="primary")

    if submitted:
        try:
            with st.spinner("Predicting..."):
                state = submit_prediction(state, client, rainfall, provider)
        except ApiError as exc:
            error = exc.message

    uploaded = st.file_uploader(
        "Upload CSV",
        type=["csv"],
        help="Upload a CSV file with 'rainfall' and 'yield' columns",
    )
    if uploaded is not None:
        try:
            state = submit_upload(state, client, uploaded.name, uploaded.getvalue())
        except ApiError as exc:
            error = exc.message

    st.session_state[_STATE_KEY] = state

    if error:
        st.error(error, icon="⚠️")
    if state.latest is not None:
        _render_latest(state.latest)
    if len(state):
        _render_history(state)
        if st.button("Clear history"):
            st.session_state[_STATE_KEY] = state.clear()
            st.rerun()


if __name__ == "__main__":
    main()
