from __future__ import annotations

from typing import Any

from anthropic import Anthropic

from yieldcast.services.parsing import ProviderReply, parse_prediction_text
from yieldcast.services.prompts import Prompt

from .base import PredictionProvider


class AnthropicProvider(PredictionProvider):
    name = "anthropic"
    label = "Anthropic"

    def __init__(self, *, max_tokens: int = 150, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.max_tokens = max_tokens

    def _build_client(self) -> Anthropic:
        return Anthropic(**self._client_options())

    def _predict(self, prompt: Prompt) -> ProviderReply:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=0,
            system=prompt.system,
            messages=[
                {
                    "role": "user",
                    "content": [{"type": "text", "text": prompt.user}],
                }
            ],
        )
        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        return parse_prediction_text(text)
