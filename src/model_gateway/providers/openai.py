from __future__ import annotations

import logging
import time
from typing import Any, Optional

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from model_gateway.adapters.openai import OpenAIRequestAdapter
from model_gateway.config import ProviderConfig
from model_gateway.errors import ProviderNotConfiguredError
from model_gateway.providers.base import ProviderAdapter
from model_gateway.response import StandardResponse
from model_gateway.types import StandardRequest


class OpenAIProvider(ProviderAdapter):
    """
    OpenAI chat-completions adapter (single-shot only).

    Tool schemas are declared to the model as function definitions and any
    tool calls it emits are reported in ``metadata["tool_calls"]``, but this
    adapter does not run the tool-use loop.
    """

    key_env_var = "OPENAI_API_KEY"

    def __init__(
        self,
        config: ProviderConfig,
        *,
        client: Optional[AsyncOpenAI] = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(config, logger=logger, name=name, **kwargs)
        if client is None and config.api_key:
            client = AsyncOpenAI(
                api_key=config.api_key,
                base_url=config.base_url,
                timeout=config.timeout,
                # Failover is the gateway's job
                max_retries=0,
            )
        self._client = client
        self._adapter = self._make_adapter()

    def _make_adapter(self) -> OpenAIRequestAdapter:
        return OpenAIRequestAdapter()

    @property
    def adapter(self) -> OpenAIRequestAdapter:
        """Request adapter for this provider."""
        return self._adapter

    def configured(self) -> bool:
        return self._client is not None

    async def send(self, request: StandardRequest) -> StandardResponse:
        """Single-shot prompt via chat completions."""
        if self._client is None:
            raise ProviderNotConfiguredError(f"{self.name}: missing {self.key_env_var}")

        start = time.monotonic()
        args = self._adapter.to_provider(request, self.model)
        self._log(f"Sending request to {self.name} model {args['model']}")
        raw: ChatCompletion = await self._client.chat.completions.create(**args)
        turn = self._adapter.from_provider(raw)

        metadata: dict[str, Any] = {"finish_reason": turn.stop_reason, "id": turn.response_id}
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
