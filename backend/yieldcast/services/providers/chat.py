"""Chat-completions vendors: OpenAI and the OpenAI-compatible DeepSeek API."""
from __future__ import annotations

from typing import Any, Optional

from openai import OpenAI

from yieldcast.services.parsing import ProviderReply, parse_prediction_text
from yieldcast.services.prompts import Prompt

from .base import PredictionProvider


class ChatCompletionProvider(PredictionProvider):
    """Free-text reply parsed by :func:`parse_prediction_text`."""

    def __init__(
        self,
        *,
        name: str,
        label: str,
        base_url: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.name = name
        self.label = label
        self.base_url = base_url

    def _build_client(self) -> OpenAI:
        options = self._client_options()
        if self.base_url:
            options["base_url"] = self.base_url
        return OpenAI(**options)

    def _predict(self, prompt: Prompt) -> ProviderReply:
        completion = self.client.chat.completions.create(
            model=self.model,
            temperature=0,
            messages=[
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
        )
        content = completion.choices[0].message.content if completion.choices else None
        return parse_prediction_text(content)
