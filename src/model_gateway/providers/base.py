"""Base classes for provider adapters."""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

from model_gateway.config import HEALTH_CHECK_TTL_SECONDS, ProviderConfig
from model_gateway.response import StandardResponse
from model_gateway.types import StandardRequest, Usage


__all__ = ["ProviderAdapter", "ProviderHealth", "ToolCapableAdapter"]


@dataclass
class ProviderHealth:
    healthy: bool = True
    last_checked_at: Optional[float] = None


class ProviderAdapter(ABC):
    """
    Base class for all provider adapters. All implementations are async-first.

    Adapters never retry. A failed call raises, and the gateway moves on to
    the next provider in the chain.
    """

    def __init__(
        self,
        config: ProviderConfig,
        *,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
        health_ttl: float = HEALTH_CHECK_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initializes the base adapter.

        Args:
            config: Static provider settings (model, key, per-token rates).
            logger: Optional logger instance. If None, a logger named after
                    this module will be used.
            name: Optional provider name, used in routing and logging.
                  If None, defaults to ``config.name``.
            health_ttl: Seconds a health result stays cached.
            clock: Monotonic time source, replaceable in tests.
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.name = name if name is not None else config.name
        self.health = ProviderHealth()
        self._health_ttl = health_ttl
        self._clock = clock

    @property
    def model(self) -> str:
        return self.config.model

    @abstractmethod
    def configured(self) -> bool:
        """True iff the credentials this provider needs are present. No I/O."""
        ...

    async def available(self) -> bool:
        """
        Return the memoized health flag, recomputing it once the TTL expires.

        This is a viability check (credentials present), not a network probe.
        It never raises; a failing check marks the provider unhealthy.
        """
        now = self._clock()
        checked = self.health.last_checked_at
        if checked is not None and now - checked < self._health_ttl:
            return self.health.healthy

        try:
            healthy = self.configured()
        except Exception as exc:
            self._log(f"Health check failed: {exc}", logging.WARNING)
            healthy = False

        self.health = ProviderHealth(healthy=healthy, last_checked_at=now)
        return healthy

    @abstractmethod
    async def send(self, request: StandardRequest) -> StandardResponse:
        """
        Single-shot call. Tools in the request are declared to the model but
        never executed here.

        Raises:
            ProviderNotConfiguredError: if credentials are missing.
            Exception: any SDK error, unchanged.
        """
        ...

    def calculate_cost(self, usage: Usage) -> float:
        """Exact cost of *usage* at this provider's per-token rates."""
        return (
            usage.input_tokens * self.config.cost_per_input_token
            + usage.output_tokens * self.config.cost_per_output_token
        )

    def estimate_cost(self, request: StandardRequest) -> float:
        """Rough pre-flight cost: ~4 characters per input token, ``max_tokens`` out."""
        estimated_input = len(request.prompt_text()) / 4
        estimated_output = request.max_tokens
        return (
            estimated_input * self.config.cost_per_input_token
            + estimated_output * self.config.cost_per_output_token
        )

    def status(self) -> dict[str, Any]:
        return {
            "configured": self.configured(),
            "enabled": self.config.enabled,
            "government_eligible": self.config.government_eligible,
            "model": self.config.model or "unknown",
            "max_concurrent": self.config.max_concurrent,
        }

    def _with_cost(self, usage: Usage) -> Usage:
        return Usage(
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            cost=self.calculate_cost(usage),
        )

    def _elapsed_ms(self, start: float) -> int:
        return int((time.monotonic() - start) * 1000)

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")

    # --- lifecycle ---------------------------------------------------------
    async def aclose(self) -> None:
        """
        Close the underlying async HTTP client, if any.
        Safe to call multiple times.
        """
        client = getattr(self, "_client", None)
        close = getattr(client, "close", None)
        if close:
            await close()


class ToolCapableAdapter(ProviderAdapter):
    """Adapter that can run a full multi-round tool-use conversation."""

    @abstractmethod
    async def send_with_tools(self, request: StandardRequest) -> StandardResponse:
        """
        Run the tool-use loop for *request* (``tools`` and ``tool_executors``
        must both be set) and return the final answer.
        """
        ...
