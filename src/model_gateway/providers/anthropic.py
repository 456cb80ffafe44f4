from __future__ import annotations

import logging
import time
from typing import Any, Optional

from anthropic import AsyncAnthropic
from anthropic.types import Message

from model_gateway.adapters.anthropic import AnthropicRequestAdapter
from model_gateway.config import TOOL_LOOP_MAX_TOKENS, ProviderConfig
from model_gateway.errors import ProviderNotConfiguredError
from model_gateway.providers.base import ToolCapableAdapter
from model_gateway.response import StandardResponse
from model_gateway.tool_loop import ModelTurn, ToolUseConversationLoop
from model_gateway.types import ChatMessage, StandardRequest


class AnthropicProvider(ToolCapableAdapter):
    """
    Anthropic (Claude) adapter: single-shot calls and the tool-use loop.

    Pass ``client`` to reuse an already-configured ``AsyncAnthropic`` (or a
    test double). Otherwise a client is built here when the config carries
    an API key; without a key the adapter reports itself unconfigured.
    """

    def __init__(
        self,
        config: ProviderConfig,
        *,
        client: Optional[AsyncAnthropic] = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(config, logger=logger, name=name, **kwargs)
        if client is None and config.api_key:
            client = AsyncAnthropic(
                api_key=config.api_key,
                base_url=config.base_url,
                timeout=config.timeout,
                # Failover is the gateway's job
                max_retries=0,
            )
        self._client = client
        self._adapter = AnthropicRequestAdapter()

    @property
    def adapter(self) -> AnthropicRequestAdapter:
        """Request adapter for Anthropic provider."""
        return self._adapter

    def configured(self) -> bool:
        return self._client is not None

    def _require_client(self) -> AsyncAnthropic:
        if self._client is None:
            raise ProviderNotConfiguredError(
                f"{self.name}: missing ANTHROPIC_API_KEY, set it in the environment or .env"
            )
        return self._client

    async def _create(self, args: dict[str, Any]) -> Message:
        client = self._require_client()
        self._log(f"Sending request to Anthropic model {args['model']}")
        return await client.messages.create(**args)

    async def send(self, request: StandardRequest) -> StandardResponse:
        """Single-shot prompt, no tool execution."""
        start = time.monotonic()
        args = self._adapter.to_provider(request, self.model)
        raw = await self._create(args)
        turn = self._adapter.from_provider(raw)

        metadata: dict[str, Any] = {"stop_reason": turn.stop_reason, "id": turn.response_id}
        if turn.tool_calls:
            metadata["tool_calls"] = turn.tool_calls

        return StandardResponse(
            content=turn.text,
            provider=self.name,
            model=turn.model or self.model,
            usage=self._with_cost(turn.usage),
            latency_ms=self._elapsed_ms(start),
            metadata=metadata,
            raw=raw,
        )

    async def send_with_tools(self, request: StandardRequest) -> StandardResponse:
        """
        Multi-round tool-use conversation.

        When Claude stops with ``tool_use``, the requested tools are executed,
        their results are sent back, and the loop continues until Claude
        produces a final text answer or ``request.max_tool_rounds`` calls
        have been made.
        """
        self._require_client()
        start = time.monotonic()

        async def next_turn(messages: list[ChatMessage]) -> ModelTurn:
            args = self._adapter.to_provider(
                request,
                self.model,
                messages=messages,
                max_tokens=TOOL_LOOP_MAX_TOKENS,
            )
            return self._adapter.from_provider(await self._create(args))

        loop = ToolUseConversationLoop(
            next_turn,
            self._adapter.tool_result_message,
            request.tool_executors or {},
            tenant_id=request.tenant_id,
            max_rounds=request.max_tool_rounds,
            logger=self.logger,
            name=self.name,
        )
        outcome = await loop.run(request.conversation())

        metadata: dict[str, Any] = {
            "tool_rounds": outcome.rounds,
            "round_limit_reached": outcome.round_limit_reached,
        }
        if outcome.last_turn is not None:
            metadata["stop_reason"] = outcome.last_turn.stop_reason
            metadata["id"] = outcome.last_turn.response_id

        return StandardResponse(
            content=outcome.content,
            provider=self.name,
            model=outcome.model or self.model,
            usage=self._with_cost(outcome.usage),
            latency_ms=self._elapsed_ms(start),
            metadata=metadata,
            tool_results=outcome.tool_results,
            raw=outcome.last_turn.raw if outcome.last_turn is not None else None,
        )
