from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx


class ApiError(Exception):
    """Raised with the server's own message so the UI can show it verbatim."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiClient:
    """Thin client for the prediction API used by the Streamlit page."""

    def __init__(self, base_url: str, client: Optional[httpx.Client] = None) -> None:
        # timeout=None: a prediction waits as long as the vendor takes
        self._client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=None)

    def predict(self, rainfall: float, provider: str) -> Dict[str, Any]:
        resp = self._send("POST", "/api/predict", json={"rainfall": rainfall, "provider": provider})
        body = self._json(resp)
        if resp.is_error or "error" in body:
            raise ApiError(body.get("error") or "Failed to fetch prediction", resp.status_code)
        return body

    def upload(self, filename: str, content: bytes) -> List[Dict[str, Any]]:
        files = {"file": (filename, content, "text/csv")}
        resp = self._send("POST", "/api/upload", files=files)
        body = self._json(resp)
        if resp.is_error or not body.get("success"):
            raise ApiError(body.get("message") or "Error uploading file", resp.status_code)
        return list(body.get("data") or [])

    def close(self) -> None:
        self._client.close()

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise ApiError(f"Could not reach the prediction API: {exc}") from exc

    @staticmethod
    def _json(resp: httpx.Response) -> Dict[str, Any]:
        try:
            body = resp.json()
        except ValueError:
            raise ApiError(f"Unexpected response from API (HTTP {resp.status_code})", resp.status_code) from None
        if not isinstance(body, dict):
            raise ApiError(f"Unexpected response from API (HTTP {resp.status_code})", resp.status_code)
        return body
