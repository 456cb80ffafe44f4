from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any

from model_gateway.types import ToolInvocation, Usage

__all__ = ["StandardResponse", "extract_json"]


@dataclass
class StandardResponse:
    """Unified response object for all providers."""

    content: str
    provider: str
    model: str
    usage: Usage = field(default_factory=Usage)
    latency_ms: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)
    tool_results: list[ToolInvocation] = field(default_factory=list)
    raw: Any = None

    @property
    def round_limit_reached(self) -> bool:
        return bool(self.metadata.get("round_limit_reached"))

    def json(self) -> Any:
        """Parse ``content`` as JSON, tolerating Markdown code fences."""
        return extract_json(self.content)


_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


def extract_json(text: str) -> Any:
    """
    Parse JSON from model output that may be wrapped in ```json fences.

    Raises:
        json.JSONDecodeError: if the stripped text is not valid JSON.
    """
    stripped = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text.strip())).strip()
    return json.loads(stripped)
