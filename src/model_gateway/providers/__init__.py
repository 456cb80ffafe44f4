from .base import ProviderAdapter, ProviderHealth, ToolCapableAdapter
from .anthropic import AnthropicProvider
from .openai import OpenAIProvider
from .gemini import GeminiProvider

__all__ = [
    "ProviderAdapter",
    "ProviderHealth",
    "ToolCapableAdapter",
    "AnthropicProvider",
    "OpenAIProvider",
    "GeminiProvider",
]
