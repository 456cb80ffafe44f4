"""
Provider configuration, read once at process start.

API keys come from the environment (a ``.env`` file is loaded first). A missing
key is the normal "not configured" state for that provider, not an error.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Mapping, Optional

from dotenv import load_dotenv

from model_gateway.types.chat import DEFAULT_MAX_TOKENS, DEFAULT_MAX_TOOL_ROUNDS

__all__ = [
    "Provider",
    "ProviderConfig",
    "get_api_key",
    "load_provider_configs",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_MAX_TOOL_ROUNDS",
    "DEFAULT_TEMPERATURE",
    "HEALTH_CHECK_TTL_SECONDS",
    "TOOL_LOOP_MAX_TOKENS",
]

HEALTH_CHECK_TTL_SECONDS: Final = 30.0
TOOL_LOOP_MAX_TOKENS: Final = 4096
DEFAULT_TEMPERATURE: Final = 0.7
DEFAULT_TIMEOUT: Final = 60.0


class Provider(StrEnum):
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GEMINI = "gemini"


# First variable found wins
_ENV_VARS: Final[dict[Provider, tuple[str, ...]]] = {
    Provider.ANTHROPIC: ("ANTHROPIC_API_KEY", "VITE_ANTHROPIC_API_KEY"),
    Provider.OPENAI: ("OPENAI_API_KEY",),
    Provider.GEMINI: ("GEMINI_API_KEY",),
}

_MODEL_ENV_VARS: Final[dict[Provider, str]] = {
    Provider.ANTHROPIC: "ANTHROPIC_MODEL",
    Provider.OPENAI: "OPENAI_MODEL",
    Provider.GEMINI: "GEMINI_MODEL",
}

_DEFAULT_OPENAI_BASE_URL: Final = "https://api.openai.com/v1"
_DEFAULT_GEMINI_BASE_URL: Final = "https://generativelanguage.googleapis.com/v1beta/openai/"


@dataclass(frozen=True)
class ProviderConfig:
    """Static settings for one backend provider.

    ``max_concurrent`` is informational: it is reported by ``status()`` for
    capacity planning but the gateway does not throttle on it.
    """

    name: str
    model: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    enabled: bool = True
    government_eligible: bool = False
    max_concurrent: int = 10
    cost_per_input_token: float = 0.0
    cost_per_output_token: float = 0.0
    timeout: float = DEFAULT_TIMEOUT

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)


def get_api_key(
    provider: Provider, environ: Optional[Mapping[str, str]] = None
) -> Optional[str]:
    """Return the API key for *provider*, or None when it is not set."""
    env = os.environ if environ is None else environ
    for var in _ENV_VARS.get(provider, ()):
        value = env.get(var)
        if value:
            return value
    return None


def load_provider_configs(
    environ: Optional[Mapping[str, str]] = None,
) -> dict[str, ProviderConfig]:
    """
    Build the per-provider configuration table.

    Args:
        environ: Mapping to read instead of ``os.environ``. When omitted, a
                 ``.env`` file is loaded into the process environment first.

    Returns:
        Dict mapping provider name to its ProviderConfig.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    anthropic_key = get_api_key(Provider.ANTHROPIC, environ)
    openai_key = get_api_key(Provider.OPENAI, environ)
    gemini_key = get_api_key(Provider.GEMINI, environ)

    return {
        Provider.ANTHROPIC.value: ProviderConfig(
            name=Provider.ANTHROPIC.value,
            model=environ.get(_MODEL_ENV_VARS[Provider.ANTHROPIC]) or "claude-sonnet-4-20250514",
            api_key=anthropic_key,
            enabled=True,
            government_eligible=False,
            cost_per_input_token=3 / 1_000_000,
            cost_per_output_token=15 / 1_000_000,
        ),
        Provider.OPENAI.value: ProviderConfig(
            name=Provider.OPENAI.value,
            model=environ.get(_MODEL_ENV_VARS[Provider.OPENAI]) or "gpt-4o",
            api_key=openai_key,
            base_url=environ.get("OPENAI_BASE_URL") or _DEFAULT_OPENAI_BASE_URL,
            # Government-eligible through Azure OpenAI
            enabled=bool(openai_key),
            government_eligible=True,
            cost_per_input_token=2.5 / 1_000_000,
            cost_per_output_token=10 / 1_000_000,
        ),
        Provider.GEMINI.value: ProviderConfig(
            name=Provider.GEMINI.value,
            model=environ.get(_MODEL_ENV_VARS[Provider.GEMINI]) or "gemini-2.0-flash",
            api_key=gemini_key,
            base_url=_DEFAULT_GEMINI_BASE_URL,
            enabled=bool(gemini_key),
            government_eligible=False,
            cost_per_input_token=0.10 / 1_000_000,
            cost_per_output_token=0.40 / 1_000_000,
        ),
    }
