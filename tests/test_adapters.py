"""Tests for the pure request/response adapters."""

from types import SimpleNamespace

import pytest

from fakes import anthropic_text, anthropic_tool_use, openai_completion
from model_gateway.adapters import AnthropicRequestAdapter, OpenAIRequestAdapter
from model_gateway.types import StandardRequest, ToolResultBlock

WEATHER_TOOL = {
    "name": "get_weather",
    "description": "Get weather for a city",
    "input_schema": {"type": "object", "properties": {"city": {"type": "string"}}},
}

WEATHER_FUNCTION = {
    "type": "function",
    "function": {
        "name": "get_weather",
        "description": "Get weather for a city",
        "parameters": {"type": "object", "properties": {"city": {"type": "string"}}},
    },
}


class TestAnthropicRequestAdapter:
    @pytest.fixture
    def adapter(self):
        return AnthropicRequestAdapter()

    def test_prompt_becomes_single_user_turn(self, adapter):
        payload = adapter.to_provider(
            StandardRequest(prompt="Hello", system_prompt="Be nice", max_tokens=50),
            "claude-x",
        )

        assert payload == {
            "model": "claude-x",
            "max_tokens": 50,
            "messages": [{"role": "user", "content": "Hello"}],
            "system": "Be nice",
        }

    def test_system_message_moves_to_system_field(self, adapter):
        request = StandardRequest(
            messages=[
                {"role": "system", "content": "You are helpful"},
                {"role": "user", "content": "Hi"},
            ]
        )

        payload = adapter.to_provider(request, "claude-x")

        assert payload["system"] == "You are helpful"
        assert payload["messages"] == [{"role": "user", "content": "Hi"}]

    def test_system_prompt_leads_and_system_turns_are_appended(self, adapter):
        request = StandardRequest(
            system_prompt="Tenant rules",
            messages=[
                {"role": "system", "content": "History notes"},
                {"role": "user", "content": "Hi"},
            ],
        )

        payload = adapter.to_provider(request, "claude-x")

        assert payload["system"] == "Tenant rules\n\nHistory notes"
        assert payload["messages"] == [{"role": "user", "content": "Hi"}]

    def test_empty_system_prompt_is_omitted(self, adapter):
        payload = adapter.to_provider(StandardRequest(prompt="Hi", system_prompt=""), "claude-x")

        assert "system" not in payload
        assert "temperature" not in payload

    def test_temperature_is_forwarded_when_set(self, adapter):
        payload = adapter.to_provider(StandardRequest(prompt="Hi", temperature=0.2), "claude-x")

        assert payload["temperature"] == 0.2

    def test_tools_are_converted_to_input_schema(self, adapter):
        request = StandardRequest(prompt="Hi", tools=[WEATHER_TOOL, WEATHER_FUNCTION])

        payload = adapter.to_provider(request, "claude-x")

        assert payload["tools"] == [WEATHER_TOOL, WEATHER_TOOL]

    def test_overrides_used_by_tool_loop(self, adapter):
        conversation = [{"role": "user", "content": "round two"}]

        payload = adapter.to_provider(
            StandardRequest(prompt="ignored", max_tokens=10),
            "claude-x",
            messages=conversation,
            max_tokens=4096,
        )

        assert payload["messages"] == conversation
        assert payload["max_tokens"] == 4096

    def test_from_provider_text(self, adapter):
        turn = adapter.from_provider(anthropic_text("Hi there", input_tokens=11, output_tokens=4))

        assert turn.text == "Hi there"
        assert turn.wants_tools is False
        assert turn.tool_calls == []
        assert turn.usage.input_tokens == 11
        assert turn.usage.output_tokens == 4
        assert turn.stop_reason == "end_turn"
        assert turn.assistant_message == {"role": "assistant", "content": "Hi there"}

    def test_from_provider_tool_use(self, adapter):
        raw = anthropic_tool_use(("toolu_1", "get_weather", {"city": "Boston"}))

        turn = adapter.from_provider(raw)

        assert turn.wants_tools is True
        assert len(turn.tool_calls) == 1
        call = turn.tool_calls[0]
        assert (call.id, call.name, call.arguments) == ("toolu_1", "get_weather", {"city": "Boston"})
        assert turn.assistant_message == {
            "role": "assistant",
            "content": [
                {
                    "type": "tool_use",
                    "id": "toolu_1",
                    "name": "get_weather",
                    "input": {"city": "Boston"},
                }
            ],
        }

    def test_tool_result_message_packs_one_user_turn(self, adapter):
        message = adapter.tool_result_message(
            [
                ToolResultBlock(tool_use_id="a", content='{"ok": 1}'),
                ToolResultBlock(tool_use_id="b", content='{"error": "boom"}', is_error=True),
            ]
        )

        assert message == {
            "role": "user",
            "content": [
                {"type": "tool_result", "tool_use_id": "a", "content": '{"ok": 1}'},
                {
                    "type": "tool_result",
                    "tool_use_id": "b",
                    "content": '{"error": "boom"}',
                    "is_error": True,
                },
            ],
        }


class TestOpenAIRequestAdapter:
    @pytest.fixture
    def adapter(self):
        return OpenAIRequestAdapter()

    def test_system_prompt_is_first_message(self, adapter):
        payload = adapter.to_provider(
            StandardRequest(prompt="Hello", system_prompt="Be nice", max_tokens=64), "gpt-x"
        )

        assert payload["messages"] == [
            {"role": "system", "content": "Be nice"},
            {"role": "user", "content": "Hello"},
        ]
        assert payload["max_tokens"] == 64
        assert payload["temperature"] == 0.7
        assert "tools" not in payload

    def test_explicit_temperature_wins(self, adapter):
        payload = adapter.to_provider(StandardRequest(prompt="Hi", temperature=0.0), "gpt-x")

        assert payload["temperature"] == 0.0

    def test_tools_become_function_declarations(self, adapter):
        request = StandardRequest(prompt="Hi", tools=[WEATHER_TOOL, WEATHER_FUNCTION])

        payload = adapter.to_provider(request, "gpt-x")

        assert payload["tools"] == [WEATHER_FUNCTION, WEATHER_FUNCTION]

    def test_tool_call_messages_are_preserved(self, adapter):
        tool_calls = [
            {
                "id": "call_1",
                "type": "function",
                "function": {"name": "get_weather", "arguments": "{}"},
            }
        ]
        request = StandardRequest(
            messages=[
                {"role": "user", "content": "Weather?"},
                {"role": "assistant", "tool_calls": tool_calls},
                {"role": "tool", "tool_call_id": "call_1", "content": "sunny"},
            ]
        )

        payload = adapter.to_provider(request, "gpt-x")

        assert payload["messages"][1] == {
            "role": "assistant",
            "tool_calls": tool_calls,
            "content": None,
        }
        assert payload["messages"][2] == {
            "role": "tool",
            "content": "sunny",
            "tool_call_id": "call_1",
        }

    def test_from_provider_text(self, adapter):
        turn = adapter.from_provider(
            openai_completion("Hi", prompt_tokens=20, completion_tokens=3)
        )

        assert turn.text == "Hi"
        assert turn.wants_tools is False
        assert turn.usage.input_tokens == 20
        assert turn.usage.output_tokens == 3
        assert turn.stop_reason == "stop"
        assert turn.response_id == "chatcmpl-1"

    def test_from_provider_tool_calls_with_bad_arguments(self, adapter):
        def tool_call(call_id, arguments):
            return SimpleNamespace(
                id=call_id,
                function=SimpleNamespace(name="get_weather", arguments=arguments),
            )

        raw = SimpleNamespace(
            id="chatcmpl-2",
            model="gpt-x",
            choices=[
                SimpleNamespace(
                    finish_reason="tool_calls",
                    message=SimpleNamespace(
                        content=None,
                        tool_calls=[
                            tool_call("call_1", '{"city": "Paris"}'),
                            tool_call("call_2", "{not json"),
                        ],
                    ),
                )
            ],
            usage=None,
        )

        turn = adapter.from_provider(raw)

        assert turn.wants_tools is True
        assert turn.text == ""
        assert [c.arguments for c in turn.tool_calls] == [{"city": "Paris"}, {}]
        assert turn.usage.total_tokens == 0
