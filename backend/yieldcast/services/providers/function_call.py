from __future__ import annotations

from typing import Any, Optional

from openai import OpenAI

from yieldcast.errors import UpstreamParseError
from yieldcast.services.parsing import ProviderReply, parse_function_arguments
from yieldcast.services.prompts import PREDICT_YIELD_FUNCTION, Prompt

from .base import PredictionProvider


class FunctionCallProvider(PredictionProvider):
    """
    Llama API vendor. The model is forced to call ``predict_yield`` so the
    reply is structured arguments rather than prose.
    """

    name = "llama"
    label = "Llama"

    def __init__(self, *, base_url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url

    def _build_client(self) -> OpenAI:
        options = self._client_options()
        if self.base_url:
            options["base_url"] = self.base_url
        return OpenAI(**options)

    def _predict(self, prompt: Prompt) -> ProviderReply:
        function_name = PREDICT_YIELD_FUNCTION["name"]
        completion = self.client.chat.completions.create(
            model=self.model,
            temperature=0,
            stream=False,
            messages=[
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
            tools=[{"type": "function", "function": PREDICT_YIELD_FUNCTION}],
            tool_choice={"type": "function", "function": {"name": function_name}},
        )
        if not completion.choices:
            raise UpstreamParseError(f"{self.label} returned no choices")
        message = completion.choices[0].message

        tool_calls = getattr(message, "tool_calls", None) or []
        for call in tool_calls:
            if call.function.name == function_name:
                return parse_function_arguments(call.function.arguments)

        # older deployments still answer with the legacy single function_call
        legacy = getattr(message, "function_call", None)
        if legacy is not None:
            return parse_function_arguments(legacy.arguments)

        raise UpstreamParseError(f"{self.label} did not call {function_name}")
