"""OpenAI adapter for pure request/response transformations."""

from __future__ import annotations

import json
from typing import Any, Sequence

from openai.types.chat import ChatCompletion

from model_gateway.config import DEFAULT_TEMPERATURE
from model_gateway.tool_loop import ModelTurn
from model_gateway.types import ChatMessage, StandardRequest, ToolCallRequest, Usage


class OpenAIRequestAdapter:
    """Adapter for converting between the gateway's format and OpenAI's."""

    def to_provider(self, request: StandardRequest, model: str) -> dict[str, Any]:
        """Build the ``chat.completions.create`` arguments for *request*."""
        openai_messages: list[dict[str, Any]] = []

        # OpenAI takes the system prompt as the first message
        if request.system_prompt:
            openai_messages.append({"role": "system", "content": request.system_prompt})

        for msg in request.conversation():
            openai_messages.append(self._convert_message(msg))

        payload: dict[str, Any] = {
            "model": model,
            "messages": openai_messages,
            "max_tokens": request.max_tokens,
            "temperature": (
                request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE
            ),
        }

        if request.tools:
            payload["tools"] = self.build_tools(request.tools)

        return payload

    @staticmethod
    def _convert_message(msg: ChatMessage) -> dict[str, Any]:
        converted: dict[str, Any] = {"role": msg["role"]}
        content = msg.get("content")

        if msg.get("tool_calls"):
            # content is null on assistant turns that only carry tool calls
            converted["content"] = content
            converted["tool_calls"] = msg["tool_calls"]
        else:
            converted["content"] = "" if content is None else content

        for key in ("tool_call_id", "name"):
            if msg.get(key):
                converted[key] = msg[key]
        return converted

    def build_tools(self, tools: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
        """Convert ``{name, description, input_schema}`` schemas to function declarations."""
        openai_tools = []
        for tool in tools:
            if tool.get("type") == "function":
                openai_tools.append(tool)
                continue
            openai_tools.append(
                {
                    "type": "function",
                    "function": {
                        "name": tool["name"],
                        "description": tool.get("description", ""),
                        "parameters": tool.get("input_schema", {}),
                    },
                }
            )
        return openai_tools

    def from_provider(self, raw: ChatCompletion) -> ModelTurn:
        """Convert OpenAI response to a ModelTurn."""
        content = ""
        finish_reason = None
        tool_calls: list[ToolCallRequest] = []

        if raw.choices and raw.choices[0].message:
            choice = raw.choices[0]
            message = choice.message
            finish_reason = choice.finish_reason
            content = message.content or ""

            # Extract tool calls
            for tc in message.tool_calls or []:
                raw_args = tc.function.arguments
                arguments = {}

                if isinstance(raw_args, dict):
                    arguments = raw_args
                elif isinstance(raw_args, str) and raw_args.strip():
                    try:
                        arguments = json.loads(raw_args)
                    except json.JSONDecodeError:
                        arguments = {}

                tool_calls.append(
                    ToolCallRequest(id=tc.id, name=tc.function.name, arguments=arguments)
                )

        usage = raw.usage
        return ModelTurn(
            text=content,
            wants_tools=finish_reason == "tool_calls",
            tool_calls=tool_calls,
            usage=Usage(
                input_tokens=(usage.prompt_tokens or 0) if usage else 0,
                output_tokens=(usage.completion_tokens or 0) if usage else 0,
            ),
            model=raw.model,
            stop_reason=finish_reason,
            response_id=raw.id,
            raw=raw,
        )
