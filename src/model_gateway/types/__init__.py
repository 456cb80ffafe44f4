from .chat import ChatMessage, ClientTier, Priority, StandardRequest, TaskType, Usage
from .tool import (
    ToolCallRequest,
    ToolErr,
    ToolExecutor,
    ToolInvocation,
    ToolOk,
    ToolOutcome,
    ToolResultBlock,
)

__all__ = [
    "ChatMessage",
    "ClientTier",
    "Priority",
    "StandardRequest",
    "TaskType",
    "Usage",
    "ToolCallRequest",
    "ToolErr",
    "ToolExecutor",
    "ToolInvocation",
    "ToolOk",
    "ToolOutcome",
    "ToolResultBlock",
]
