"""Anthropic adapter for pure request/response transformations."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from anthropic.types import Message

from model_gateway.tool_loop import ModelTurn
from model_gateway.types import (
    ChatMessage,
    StandardRequest,
    ToolCallRequest,
    ToolResultBlock,
    Usage,
)


class AnthropicRequestAdapter:
    """Adapter for converting between the gateway's format and Anthropic's."""

    def to_provider(
        self,
        request: StandardRequest,
        model: str,
        *,
        messages: Optional[Sequence[ChatMessage]] = None,
        max_tokens: Optional[int] = None,
    ) -> dict[str, Any]:
        """Build the ``messages.create`` arguments for *request*.

        Args:
            request: The request to translate.
            model: Model id to call.
            messages: Conversation override, used by the tool loop.
            max_tokens: Output token override, used by the tool loop.
        """
        anthropic_messages: list[dict[str, Any]] = []
        # request.system_prompt leads; system turns from the conversation follow it
        system_parts = [request.system_prompt] if request.system_prompt else []

        source = request.conversation() if messages is None else messages
        for msg in source:
            # Anthropic takes the system prompt as a separate field
            if msg["role"] == "system":
                content = msg.get("content", "")
                if content:
                    system_parts.append(content if isinstance(content, str) else str(content))
                continue

            anthropic_msg: dict[str, Any] = {"role": msg["role"]}
            content = msg.get("content")
            if content is None:
                anthropic_msg["content"] = ""
            elif isinstance(content, (str, list)):
                anthropic_msg["content"] = content
            else:
                anthropic_msg["content"] = str(content)
            anthropic_messages.append(anthropic_msg)

        payload: dict[str, Any] = {
            "model": model,
            # Anthropic requires max_tokens
            "max_tokens": max_tokens or request.max_tokens,
            "messages": anthropic_messages,
        }

        # Claude rejects an empty system string
        if system_parts:
            payload["system"] = "\n\n".join(system_parts)
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.tools:
            payload["tools"] = self.build_tools(request.tools)

        return payload

    def build_tools(self, tools: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
        """Convert tool schemas to Anthropic's ``input_schema`` shape."""
        anthropic_tools = []
        for tool in tools:
            if tool.get("type") == "function":
                func = tool["function"]
                anthropic_tools.append(
                    {
                        "name": func["name"],
                        "description": func.get("description", ""),
                        "input_schema": func.get("parameters", {}),
                    }
                )
            else:
                anthropic_tools.append(tool)
        return anthropic_tools

    def from_provider(self, raw: Message) -> ModelTurn:
        """Convert an Anthropic response to a ModelTurn."""
        text_parts = []
        tool_calls = []

        for block in raw.content or []:
            if block.type == "text":
                text_parts.append(block.text)
            elif block.type == "tool_use":
                tool_calls.append(
                    ToolCallRequest(
                        id=block.id,
                        name=block.name,
                        arguments=_tool_input(block),
                    )
                )

        usage = raw.usage
        return ModelTurn(
            text="\n".join(text_parts),
            wants_tools=raw.stop_reason == "tool_use",
            tool_calls=tool_calls,
            usage=Usage(
                input_tokens=(usage.input_tokens or 0) if usage else 0,
                output_tokens=(usage.output_tokens or 0) if usage else 0,
            ),
            model=raw.model,
            stop_reason=raw.stop_reason,
            response_id=raw.id,
            assistant_message=self.assistant_message_from(raw),
            raw=raw,
        )

    def assistant_message_from(self, raw: Message) -> ChatMessage:
        """Echo a reply back as the assistant turn of the next request.

        Text-only replies collapse to a string. Replies with tool calls keep
        their blocks in order so each tool_use id can be answered.
        """
        blocks: list[dict[str, Any]] = []
        for block in raw.content or []:
            if block.type == "text":
                blocks.append({"type": "text", "text": block.text})
            elif block.type == "tool_use":
                blocks.append(
                    {
                        "type": "tool_use",
                        "id": block.id,
                        "name": block.name,
                        "input": _tool_input(block),
                    }
                )

        if any(b["type"] == "tool_use" for b in blocks):
            return {"role": "assistant", "content": blocks}
        return {"role": "assistant", "content": "".join(b["text"] for b in blocks)}

    def tool_result_message(self, blocks: Sequence[ToolResultBlock]) -> ChatMessage:
        """Pack one round of tool results into a single user turn."""
        content = []
        for block in blocks:
            item: dict[str, Any] = {
                "type": "tool_result",
                "tool_use_id": block.tool_use_id,
                "content": block.content,
            }
            if block.is_error:
                item["is_error"] = True
            content.append(item)
        return {"role": "user", "content": content}


def _tool_input(block: Any) -> dict[str, Any]:
    return dict(block.input) if hasattr(block.input, "items") else {}
