"""
Bounded multi-round tool-use conversation.

The loop asks the backend for its next turn, runs every tool the model asked
for, feeds the outcomes back as one tool-result turn and repeats, until the
model produces a final answer or ``max_rounds`` backend calls have been made.
Tool failures are reported to the model, never raised to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence

from model_gateway.types import (
    ChatMessage,
    ToolCallRequest,
    ToolErr,
    ToolExecutor,
    ToolInvocation,
    ToolOk,
    ToolOutcome,
    ToolResultBlock,
    Usage,
)

__all__ = [
    "ModelTurn",
    "ToolLoopOutcome",
    "ToolUseConversationLoop",
    "ROUND_LIMIT_MESSAGE",
]

ROUND_LIMIT_MESSAGE = "I ran into a processing limit. Please try a more specific question."


@dataclass
class ModelTurn:
    """One backend reply, normalized by a request adapter."""

    text: str
    wants_tools: bool = False
    tool_calls: list[ToolCallRequest] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)
    model: Optional[str] = None
    stop_reason: Optional[str] = None
    response_id: Optional[str] = None
    # Provider-shaped assistant turn to append before the tool results
    assistant_message: Optional[ChatMessage] = None
    raw: Any = None


@dataclass
class ToolLoopOutcome:
    content: str
    tool_results: list[ToolInvocation]
    usage: Usage
    rounds: int
    model: Optional[str] = None
    round_limit_reached: bool = False
    last_turn: Optional[ModelTurn] = None


NextTurn = Callable[[list[ChatMessage]], Awaitable[ModelTurn]]
ToolResultTurn = Callable[[Sequence[ToolResultBlock]], ChatMessage]


class ToolUseConversationLoop:
    """
    Drives one tool-use conversation against a single backend.

    Args:
        next_turn: Coroutine function that sends the conversation (with the
                   declared tools) to the backend and returns its ModelTurn.
        tool_result_turn: Builds the provider-shaped turn that carries all of
                          a round's tool results.
        executors: Tool name -> async executor.
        tenant_id: Passed through to every executor.
        max_rounds: Hard cap on backend calls.
        logger: Optional logger instance.
        name: Name used in log lines, usually the provider name.
    """

    def __init__(
        self,
        next_turn: NextTurn,
        tool_result_turn: ToolResultTurn,
        executors: Mapping[str, ToolExecutor],
        *,
        tenant_id: Optional[str] = None,
        max_rounds: int = 5,
        logger: Optional[logging.Logger] = None,
        name: str = "tool-loop",
    ) -> None:
        self._next_turn = next_turn
        self._tool_result_turn = tool_result_turn
        self._executors = executors
        self.tenant_id = tenant_id
        self.max_rounds = max_rounds
        self.logger = logger or logging.getLogger(__name__)
        self.name = name

    async def run(self, conversation: Sequence[ChatMessage]) -> ToolLoopOutcome:
        messages = list(conversation)
        tool_results: list[ToolInvocation] = []
        usage = Usage()
        turn: Optional[ModelTurn] = None
        model: Optional[str] = None

        for round_no in range(self.max_rounds):
            turn = await self._next_turn(messages)
            usage = usage + turn.usage
            model = turn.model or model

            if not turn.wants_tools or not turn.tool_calls:
                return ToolLoopOutcome(
                    content=turn.text,
                    tool_results=tool_results,
                    usage=usage,
                    rounds=round_no + 1,
                    model=model,
                    last_turn=turn,
                )

            if turn.assistant_message is not None:
                messages.append(turn.assistant_message)

            blocks = []
            for call in turn.tool_calls:
                outcome = await self._execute(call, tool_results)
                blocks.append(self._to_block(call, outcome))
            messages.append(self._tool_result_turn(blocks))

        self._log(
            f"Reached tool round limit ({self.max_rounds}) without a final answer",
            logging.WARNING,
        )
        return ToolLoopOutcome(
            content=ROUND_LIMIT_MESSAGE,
            tool_results=tool_results,
            usage=usage,
            rounds=self.max_rounds,
            model=model,
            round_limit_reached=True,
            last_turn=turn,
        )

    async def _execute(
        self, call: ToolCallRequest, tool_results: list[ToolInvocation]
    ) -> ToolOutcome:
        executor = self._executors.get(call.name)
        if executor is None:
            self._log(f"Model requested unknown tool: {call.name}", logging.WARNING)
            return ToolErr(f"Unknown tool: {call.name}")

        self._log(f"Executing tool: {call.name}")
        try:
            result = await executor(call.arguments, self.tenant_id)
        except Exception as exc:
            self._log(f"Tool {call.name} failed: {exc}", logging.WARNING)
            return ToolErr(str(exc))

        tool_results.append(ToolInvocation(tool=call.name, input=call.arguments, result=result))
        return ToolOk(result)

    def _to_block(self, call: ToolCallRequest, outcome: ToolOutcome) -> ToolResultBlock:
        try:
            return ToolResultBlock.from_outcome(call.id, outcome)
        except (TypeError, ValueError) as exc:
            self._log(f"Tool {call.name} returned an unserializable result: {exc}", logging.WARNING)
            return ToolResultBlock.from_outcome(
                call.id, ToolErr(f"Result of {call.name} is not JSON-serializable: {exc}")
            )

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")
