from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from yieldcast.errors import ProviderNotConfigured, UpstreamCallError, YieldcastError
from yieldcast.services.parsing import ProviderReply
from yieldcast.services.prompts import YIELD_CONSTRAINTS, Prompt

YieldRange = Tuple[float, float]

DEFAULT_YIELD_RANGE: YieldRange = (YIELD_CONSTRAINTS["MIN"], YIELD_CONSTRAINTS["MAX"])


class PredictionProvider(ABC):
    """
    One hosted LLM vendor that can turn the yield prompt into a number.

    Subclasses only know how to call their SDK and read its reply shape.
    SDK failures of any kind surface as UpstreamCallError; parse failures
    raised by subclasses pass through untouched. Nothing is retried.
    """

    name: str
    label: str
    yield_range: YieldRange = DEFAULT_YIELD_RANGE

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: str,
        timeout: Optional[float] = None,
        client: Any = None,
        yield_range: Optional[YieldRange] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client
        if yield_range is not None:
            self.yield_range = yield_range

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise ProviderNotConfigured(f"{self.label} API not configured - missing API key")
            self._client = self._build_client()
        return self._client

    def predict(self, prompt: Prompt) -> ProviderReply:
        try:
            return self._predict(prompt)
        except YieldcastError:
            raise
        except Exception as exc:
            raise UpstreamCallError(f"{self.label} request failed: {exc}") from exc

    def _client_options(self) -> Dict[str, Any]:
        # SDKs retry twice by default; a failed call must surface as-is.
        options: Dict[str, Any] = {"api_key": self.api_key, "max_retries": 0}
        if self.timeout is not None:
            options["timeout"] = self.timeout
        return options

    @abstractmethod
    def _build_client(self) -> Any:
        ...

    @abstractmethod
    def _predict(self, prompt: Prompt) -> ProviderReply:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, model={self.model!r})"
