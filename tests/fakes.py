"""Test doubles: fake adapters, fake SDK clients and provider reply builders."""

from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any, Optional, Sequence

from anthropic.types import Message, TextBlock, ToolUseBlock
from anthropic.types import Usage as AnthropicUsage
from openai.types import CompletionUsage
from openai.types.chat import ChatCompletion, ChatCompletionMessage
from openai.types.chat.chat_completion import Choice

from model_gateway.config import ProviderConfig
from model_gateway.providers.base import ProviderAdapter, ToolCapableAdapter
from model_gateway.response import StandardResponse
from model_gateway.types import StandardRequest, Usage


def make_config(name: str, **overrides: Any) -> ProviderConfig:
    values = dict(
        name=name,
        model=f"{name}-model",
        api_key=f"{name}-key",
        cost_per_input_token=1 / 1_000_000,
        cost_per_output_token=2 / 1_000_000,
    )
    values.update(overrides)
    return ProviderConfig(**values)


class FakeAdapter(ProviderAdapter):
    """Single-shot adapter that records calls and returns or raises on demand."""

    def __init__(
        self,
        name: str,
        *,
        is_configured: bool = True,
        error: Optional[Exception] = None,
        content: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(make_config(name), **kwargs)
        self._is_configured = is_configured
        self.error = error
        self.content = content if content is not None else f"answer from {name}"
        self.send_calls: list[StandardRequest] = []

    def configured(self) -> bool:
        return self._is_configured

    async def send(self, request: StandardRequest) -> StandardResponse:
        self.send_calls.append(request)
        if self.error is not None:
            raise self.error
        usage = Usage(input_tokens=10, output_tokens=5)
        return StandardResponse(
            content=self.content,
            provider=self.name,
            model=self.model,
            usage=self._with_cost(usage),
            latency_ms=3,
        )


class FakeToolAdapter(FakeAdapter, ToolCapableAdapter):
    """Fake adapter that also claims the tool-use capability."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(name, **kwargs)
        self.tool_calls: list[StandardRequest] = []

    async def send_with_tools(self, request: StandardRequest) -> StandardResponse:
        self.tool_calls.append(request)
        if self.error is not None:
            raise self.error
        return StandardResponse(
            content=f"tool answer from {self.name}",
            provider=self.name,
            model=self.model,
        )


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class _ScriptedEndpoint:
    """Returns scripted replies in order; the last reply repeats forever."""

    def __init__(self, replies: Sequence[Any]) -> None:
        self._replies = list(replies)
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(copy.deepcopy(kwargs))
        reply = self._replies.pop(0) if len(self._replies) > 1 else self._replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply


def fake_anthropic_client(*replies: Any) -> SimpleNamespace:
    return SimpleNamespace(messages=_ScriptedEndpoint(replies))


def fake_openai_client(*replies: Any) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=_ScriptedEndpoint(replies)))


def anthropic_text(
    text: str,
    *,
    input_tokens: int = 10,
    output_tokens: int = 5,
    model: str = "claude-sonnet-4-20250514",
) -> Message:
    return Message(
        id="msg_text",
        type="message",
        role="assistant",
        model=model,
        content=[TextBlock(type="text", text=text)],
        stop_reason="end_turn",
        stop_sequence=None,
        usage=AnthropicUsage(input_tokens=input_tokens, output_tokens=output_tokens),
    )


def anthropic_tool_use(
    *calls: tuple[str, str, dict[str, Any]],
    input_tokens: int = 10,
    output_tokens: int = 5,
    model: str = "claude-sonnet-4-20250514",
) -> Message:
    """Build a ``tool_use`` reply from ``(id, name, input)`` triples."""
    return Message(
        id="msg_tools",
        type="message",
        role="assistant",
        model=model,
        content=[
            ToolUseBlock(type="tool_use", id=call_id, name=name, input=tool_input)
            for call_id, name, tool_input in calls
        ],
        stop_reason="tool_use",
        stop_sequence=None,
        usage=AnthropicUsage(input_tokens=input_tokens, output_tokens=output_tokens),
    )


def openai_completion(
    content: str,
    *,
    prompt_tokens: int = 12,
    completion_tokens: int = 7,
    model: str = "gpt-4o",
    finish_reason: str = "stop",
) -> ChatCompletion:
    message = ChatCompletionMessage(role="assistant", content=content)
    choice = Choice(finish_reason=finish_reason, index=0, message=message)
    return ChatCompletion(
        id="chatcmpl-1",
        choices=[choice],
        created=0,
        model=model,
        object="chat.completion",
        usage=CompletionUsage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        ),
    )
