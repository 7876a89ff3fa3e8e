from __future__ import annotations

from functools import lru_cache

from pharmacy_navi.ai.providers.base import ChatProvider, ProviderError
from pharmacy_navi.ai.providers.openrouter import OpenRouterProvider
from pharmacy_navi.ai.providers.stub import StubProvider
from pharmacy_navi.config.settings import get_settings


@lru_cache(maxsize=1)
def get_ai_provider() -> ChatProvider:
    provider_name = get_settings().ai_provider
    if provider_name == "stub":
        return StubProvider()
    if provider_name == "openrouter":
        return OpenRouterProvider()
    raise ProviderError(None, f"Unsupported AI_PROVIDER: {provider_name}")
