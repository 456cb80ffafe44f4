"""Request-side types shared by the router, the adapters and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Mapping, Optional, Sequence, Union

from model_gateway.types.tool import ToolExecutor

__all__ = [
    "ChatMessage",
    "ClientTier",
    "Priority",
    "StandardRequest",
    "TaskType",
    "Usage",
]

# Type alias for chat messages
ChatMessage = dict[str, Any]

DEFAULT_MAX_TOKENS = 1024
DEFAULT_MAX_TOOL_ROUNDS = 5


class TaskType(StrEnum):
    ASK_PLEXI = "ask_plexi"
    OUTREACH_GENERATION = "outreach_generation"
    ENRICHMENT = "enrichment"
    DEAL_ROOM_ARTIFACT = "deal_room_artifact"
    EVIDENCE_BUNDLE = "evidence_bundle"
    WARMTH_ANALYSIS = "warmth_analysis"
    DOCUMENT_SUMMARY = "document_summary"
    GENERAL = "general"


class ClientTier(StrEnum):
    STANDARD = "standard"
    GOVERNMENT = "government"
    GOVERNMENT_STATE = "gov_state"
    ENTERPRISE = "enterprise"


class Priority(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


@dataclass(frozen=True)
class Usage:
    """Token usage and cost of one or more backend calls."""

    input_tokens: int = 0
    output_tokens: int = 0
    cost: float = 0.0

    def __add__(self, other: "Usage") -> "Usage":
        if not isinstance(other, Usage):
            return NotImplemented
        return Usage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
            cost=self.cost + other.cost,
        )

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass(frozen=True)
class StandardRequest:
    """
    One logical model call, independent of any backend.

    Either ``prompt`` or ``messages`` carries the user input. When both are
    given, ``messages`` wins and ``prompt`` is only used by prompt templates
    and cost estimates.

    Tool use is requested by passing both ``tools`` (schemas in the
    ``{name, description, input_schema}`` shape; OpenAI function schemas are
    accepted too) and ``tool_executors`` (tool name -> async callable taking
    ``(tool_input, tenant_id)``).
    """

    task_type: Union[TaskType, str] = TaskType.GENERAL
    prompt: Optional[str] = None
    messages: Optional[Sequence[ChatMessage]] = None
    system_prompt: Optional[str] = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: Optional[float] = None
    client_tier: Union[ClientTier, str] = ClientTier.STANDARD
    priority: Optional[Union[Priority, str]] = None
    tenant_id: Optional[str] = None
    tools: Optional[Sequence[dict[str, Any]]] = None
    tool_executors: Optional[Mapping[str, ToolExecutor]] = None
    max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS
    # Template inputs (account name, opportunity data, ...)
    context: Optional[Mapping[str, Any]] = None
    response_format: Optional[str] = None

    @property
    def wants_tools(self) -> bool:
        return bool(self.tools) and bool(self.tool_executors)

    def conversation(self) -> list[ChatMessage]:
        """Return the turns to send: ``messages`` if present, else one user turn."""
        if self.messages:
            return [dict(msg) for msg in self.messages]
        return [{"role": "user", "content": self.prompt or ""}]

    def prompt_text(self) -> str:
        """Plain text of the user input, used for cost estimates."""
        if self.prompt:
            return self.prompt
        parts: list[str] = []
        for msg in self.messages or ():
            content = msg.get("content")
            if isinstance(content, str):
                parts.append(content)
        return "\n".join(parts)
