"""
Provider‑neutral dataclasses for client‑side tool use.

Each executed tool call produces a tagged outcome (``ToolOk`` or ``ToolErr``).
Outcomes only become JSON strings when they are turned into a
``ToolResultBlock`` for the next model call.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

__all__ = [
    "ToolCallRequest",
    "ToolExecutor",
    "ToolInvocation",
    "ToolOk",
    "ToolErr",
    "ToolOutcome",
    "ToolResultBlock",
]

# async (tool_input, tenant_id) -> JSON-serializable value
ToolExecutor = Callable[[dict[str, Any], Union[str, None]], Awaitable[Any]]


@dataclass(slots=True)
class ToolCallRequest:
    """A model‑agnostic request emitted by the LLM to call a local tool."""
    id: str
    name: str
    arguments: dict[str, Any]


@dataclass(frozen=True, slots=True)
class ToolInvocation:
    """A tool call that actually ran, as reported on the final response."""
    tool: str
    input: dict[str, Any]
    result: Any


@dataclass(frozen=True, slots=True)
class ToolOk:
    value: Any


@dataclass(frozen=True, slots=True)
class ToolErr:
    message: str


ToolOutcome = Union[ToolOk, ToolErr]


@dataclass(frozen=True, slots=True)
class ToolResultBlock:
    """Wire form of one tool outcome, correlated to the model's tool call id."""
    tool_use_id: str
    content: str
    is_error: bool = False

    @classmethod
    def from_outcome(cls, tool_use_id: str, outcome: ToolOutcome) -> "ToolResultBlock":
        if isinstance(outcome, ToolErr):
            return cls(
                tool_use_id=tool_use_id,
                content=json.dumps({"error": outcome.message}),
                is_error=True,
            )
        return cls(
            tool_use_id=tool_use_id,
            content=json.dumps(outcome.value, default=str),
        )
