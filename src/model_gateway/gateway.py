"""Gateway orchestrator: the single entry point for model calls.

FLOW:
1. Caller awaits ``gateway.send_prompt(request)``
2. RoutingPolicy picks the ordered provider chain
3. For each provider: skip if unconfigured/unavailable, adapt the prompt,
   call ``send`` or ``send_with_tools``
4. First success is returned; a failure moves on to the next provider
5. Only when the whole chain is exhausted does the caller see an error

Providers are tried one at a time, never in parallel, so one logical request
is never paid for twice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from model_gateway.errors import (
    AllProvidersFailedError,
    ConfigurationError,
    classify_error,
)
from model_gateway.prompts import PromptVariantResolver
from model_gateway.providers.base import ProviderAdapter, ToolCapableAdapter
from model_gateway.response import StandardResponse
from model_gateway.routing import DEFAULT_CHAIN, DEFAULT_RULES, RoutingPolicy
from model_gateway.types import StandardRequest

__all__ = ["GatewayOrchestrator", "ProviderStats"]


@dataclass
class ProviderStats:
    """In-memory call telemetry for one provider."""

    calls: int = 0
    failures: int = 0
    skips: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    total_cost: float = 0.0
    last_latency_ms: Optional[int] = None
    last_error: Optional[str] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "calls": self.calls,
            "failures": self.failures,
            "skips": self.skips,
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_cost": self.total_cost,
            "last_latency_ms": self.last_latency_ms,
            "last_error": self.last_error,
        }


class GatewayOrchestrator:
    """Routes requests across provider adapters with sequential failover.

    Usage:
        gateway = GatewayOrchestrator(adapters={"anthropic": ..., "openai": ...})
        response = await gateway.send_prompt(StandardRequest(task_type="general", prompt="Hi"))
    """

    def __init__(
        self,
        adapters: Mapping[str, ProviderAdapter],
        *,
        policy: Optional[RoutingPolicy] = None,
        resolver: Optional[PromptVariantResolver] = None,
        logger: Optional[logging.Logger] = None,
        name: str = "gateway",
    ) -> None:
        """
        Args:
            adapters: Provider name -> adapter, constructed by the caller.
            policy: Routing policy. Defaults to the built-in rules.
            resolver: Prompt variant resolver. Defaults to the built-in templates.
            logger: Optional logger instance.
            name: Name used in log lines.

        Raises:
            ConfigurationError: if the policy names a provider with no adapter.
        """
        self._adapters = dict(adapters)
        self.policy = policy or RoutingPolicy(DEFAULT_RULES, DEFAULT_CHAIN)
        self.resolver = resolver or PromptVariantResolver()
        self.logger = logger or logging.getLogger(__name__)
        self.name = name
        self._stats: dict[str, ProviderStats] = {n: ProviderStats() for n in self._adapters}

        missing = sorted(self.policy.provider_names() - self._adapters.keys())
        if missing:
            raise ConfigurationError(
                f"Routing references providers with no registered adapter: {', '.join(missing)}"
            )

    @property
    def adapters(self) -> dict[str, ProviderAdapter]:
        return dict(self._adapters)

    def get_adapter(self, name: str) -> ProviderAdapter:
        try:
            return self._adapters[name]
        except KeyError:
            raise ConfigurationError(f"Unknown provider: {name}") from None

    # =========================================================================
    # MAIN ENTRY POINT
    # =========================================================================

    async def send_prompt(self, request: StandardRequest) -> StandardResponse:
        """Send *request* through the failover chain chosen by the routing policy.

        Returns:
            The first successful StandardResponse.

        Raises:
            AllProvidersFailedError: every provider was skipped or failed.
            ConfigurationError: the chain names an unregistered provider.
        """
        chain = self.policy.route(request)
        last_error: Optional[BaseException] = None
        attempted: list[str] = []

        for provider_name in chain:
            adapter = self.get_adapter(provider_name)
            stats = self._stats.setdefault(provider_name, ProviderStats())

            if not adapter.configured() or not await adapter.available():
                stats.skips += 1
                continue

            adapted = self.resolver.adapt(request, provider_name)

            if adapted.wants_tools and not isinstance(adapter, ToolCapableAdapter):
                self._log(
                    f"{provider_name} does not support tool use, skipping",
                    logging.WARNING,
                )
                stats.skips += 1
                continue

            attempted.append(provider_name)
            stats.calls += 1
            try:
                if adapted.wants_tools:
                    response = await adapter.send_with_tools(adapted)
                else:
                    response = await adapter.send(adapted)
            except Exception as exc:
                last_error = exc
                stats.failures += 1
                stats.last_error = str(exc)
                self._log(
                    f"{provider_name} failed: {classify_error(exc, self.logger)}",
                    logging.WARNING,
                )
                continue

            self._record_success(provider_name, stats, request, response)
            return response

        error = AllProvidersFailedError(last_error, attempted)
        self._log(str(error), logging.ERROR)
        raise error

    # =========================================================================
    # TELEMETRY & HEALTH
    # =========================================================================

    def _record_success(
        self,
        provider_name: str,
        stats: ProviderStats,
        request: StandardRequest,
        response: StandardResponse,
    ) -> None:
        usage = response.usage
        stats.input_tokens += usage.input_tokens
        stats.output_tokens += usage.output_tokens
        stats.total_cost += usage.cost
        stats.last_latency_ms = response.latency_ms
        self._log(
            f"{provider_name} | {request.task_type} | ${usage.cost:.5f} | {response.latency_ms}ms"
        )

    def get_provider_health(self) -> dict[str, dict[str, Any]]:
        """Read-only status snapshot for every registered provider."""
        return {name: adapter.status() for name, adapter in self._adapters.items()}

    def get_stats(self) -> dict[str, Any]:
        return {"providers": {name: s.as_dict() for name, s in self._stats.items()}}

    def estimate_cost(self, request: StandardRequest) -> dict[str, float]:
        """Pre-flight estimate per configured provider in the routed chain."""
        estimates = {}
        for provider_name in self.policy.route(request):
            adapter = self.get_adapter(provider_name)
            if adapter.configured():
                estimates[provider_name] = adapter.estimate_cost(request)
        return estimates

    # --- lifecycle ---------------------------------------------------------
    async def aclose(self) -> None:
        for adapter in self._adapters.values():
            await adapter.aclose()

    async def __aenter__(self) -> "GatewayOrchestrator":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")
