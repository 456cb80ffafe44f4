from __future__ import annotations

from model_gateway.adapters.gemini import GeminiRequestAdapter
from model_gateway.providers.openai import OpenAIProvider


class GeminiProvider(OpenAIProvider):
    """
    Gemini adapter via the OpenAI-compatible endpoint.

    ``config.base_url`` must point at Gemini's OpenAI-compatible API, which
    ``load_provider_configs`` does by default.
    """

    key_env_var = "GEMINI_API_KEY"

    def _make_adapter(self) -> GeminiRequestAdapter:
        return GeminiRequestAdapter()
