"""Gemini adapter for pure request/response transformations.

Since Gemini is reached through its OpenAI-compatible endpoint, we just re-export the OpenAI adapter.
"""

from .openai import OpenAIRequestAdapter

# Gemini uses the OpenAI-compatible API, so it's the same adapter
GeminiRequestAdapter = OpenAIRequestAdapter
