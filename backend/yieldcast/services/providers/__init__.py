from __future__ import annotations

from typing import Callable, Optional, Union

from yieldcast.config import Settings, get_settings
from yieldcast.errors import InvalidRequest
from yieldcast.schemas.predict import Provider

from .anthropic_provider import AnthropicProvider
from .base import PredictionProvider
from .chat import ChatCompletionProvider
from .function_call import FunctionCallProvider

ProviderFactory = Callable[[Provider], PredictionProvider]


def build_provider(name: Union[Provider, str], settings: Optional[Settings] = None) -> PredictionProvider:
    """Return the provider variant for an allow-listed vendor name."""
    try:
        provider = Provider(name)
    except ValueError:
        raise InvalidRequest("Invalid provider") from None

    s = settings or get_settings()
    timeout = s.LLM_TIMEOUT_SECONDS

    if provider is Provider.OPENAI:
        return ChatCompletionProvider(
            name=provider.value,
            label="OpenAI",
            api_key=s.OPENAI_API_KEY,
            model=s.OPENAI_MODEL,
            base_url=s.OPENAI_BASE_URL,
            timeout=timeout,
        )
    if provider is Provider.DEEPSEEK:
        return ChatCompletionProvider(
            name=provider.value,
            label="DeepSeek",
            api_key=s.DEEPSEEK_API_KEY,
            model=s.DEEPSEEK_MODEL,
            base_url=s.DEEPSEEK_BASE_URL,
            timeout=timeout,
        )
    if provider is Provider.ANTHROPIC:
        return AnthropicProvider(
            api_key=s.ANTHROPIC_API_KEY,
            model=s.ANTHROPIC_MODEL,
            max_tokens=s.ANTHROPIC_MAX_TOKENS,
            timeout=timeout,
        )
    return FunctionCallProvider(
        api_key=s.LLAMA_API_KEY,
        model=s.LLAMA_MODEL,
        base_url=s.LLAMA_BASE_URL,
        timeout=timeout,
    )


__all__ = [
    "PredictionProvider",
    "ChatCompletionProvider",
    "AnthropicProvider",
    "FunctionCallProvider",
    "ProviderFactory",
    "build_provider",
]
