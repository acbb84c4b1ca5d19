from io import BytesIO


def csv_upload(text: str, filename: str = "history.csv"):
    """Multipart ``files`` mapping for /api/upload."""
    return {"file": (filename, BytesIO(text.encode("utf-8")), "text/csv")}


def post_predict(client, rainfall, provider="openai"):
    return client.post("/api/predict", json={"rainfall": rainfall, "provider": provider})


def error_message(resp) -> str:
    body = resp.json()
    return body.get("error") or body.get("message") or ""
