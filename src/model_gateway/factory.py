from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Type

from model_gateway.config import Provider, ProviderConfig, load_provider_configs
from model_gateway.gateway import GatewayOrchestrator
from model_gateway.prompts import PromptVariantResolver
from model_gateway.providers.anthropic import AnthropicProvider
from model_gateway.providers.base import ProviderAdapter
from model_gateway.providers.gemini import GeminiProvider
from model_gateway.providers.openai import OpenAIProvider
from model_gateway.routing import RoutingPolicy

# map Provider enum to its adapter implementation
_ADAPTER_REGISTRY: dict[Provider, Type[ProviderAdapter]] = {
    Provider.ANTHROPIC: AnthropicProvider,
    Provider.OPENAI: OpenAIProvider,
    Provider.GEMINI: GeminiProvider,
}


def create_adapter(
    provider: Provider | str,
    config: ProviderConfig,
    *,
    client: Any = None,
    logger: logging.Logger | None = None,
    **adapter_kwargs: Any,
) -> ProviderAdapter:
    """
    Factory for creating any supported provider adapter.

    Args:
        provider: Which provider to use (ANTHROPIC, OPENAI, GEMINI).
        config: Static settings for that provider.
        client: Optional pre-configured SDK client (or test double).
            - For Provider.ANTHROPIC: an AsyncAnthropic instance
            - For Provider.OPENAI / Provider.GEMINI: an AsyncOpenAI instance
            If not provided, one is built from ``config`` when it has an API key.
        logger: Optional custom logger.
        **adapter_kwargs: Any extra args to pass through (health_ttl, clock).
    """
    try:
        adapter_cls = _ADAPTER_REGISTRY[Provider(provider)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unsupported provider: {provider}") from exc

    return adapter_cls(config, client=client, logger=logger, **adapter_kwargs)


def build_adapters(
    configs: Optional[Mapping[str, ProviderConfig]] = None,
    *,
    clients: Optional[Mapping[str, Any]] = None,
    logger: logging.Logger | None = None,
) -> dict[str, ProviderAdapter]:
    """Construct one adapter per configured provider name, once, at startup."""
    configs = load_provider_configs() if configs is None else configs
    clients = clients or {}
    return {
        name: create_adapter(name, config, client=clients.get(name), logger=logger)
        for name, config in configs.items()
    }


def create_gateway(
    configs: Optional[Mapping[str, ProviderConfig]] = None,
    *,
    adapters: Optional[Mapping[str, ProviderAdapter]] = None,
    policy: Optional[RoutingPolicy] = None,
    resolver: Optional[PromptVariantResolver] = None,
    logger: logging.Logger | None = None,
) -> GatewayOrchestrator:
    """
    Build a ready-to-use gateway.

    Adapters are taken as given when ``adapters`` is passed; otherwise they are
    built from ``configs`` (read from the environment when omitted).
    """
    if adapters is None:
        adapters = build_adapters(configs, logger=logger)
    return GatewayOrchestrator(adapters, policy=policy, resolver=resolver, logger=logger)
