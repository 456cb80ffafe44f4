from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from model_gateway import StandardRequest, TaskType, create_gateway

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

PROJECT_SEARCH_TOOL: dict[str, Any] = {
    "name": "search_projects",
    "description": "Search the tenant's project pipeline by city",
    "input_schema": {
        "type": "object",
        "properties": {
            "city": {"type": "string", "description": "City name, e.g. Austin"},
        },
        "required": ["city"],
    },
}


async def search_projects(tool_input: dict[str, Any], tenant_id: Optional[str]) -> list[dict]:
    """Stub implementation of search_projects."""
    logger.info("search_projects for tenant %s: %s", tenant_id, tool_input)
    return [
        {"name": "Riverside Medical Center", "value": 42_000_000, "status": "bidding"},
        {"name": "Eastside Transit Hub", "value": 18_500_000, "status": "design"},
    ]


async def ask_with_tools() -> None:
    async with create_gateway() as gateway:
        request = StandardRequest(
            task_type=TaskType.ASK_PLEXI,
            prompt="Which projects in Austin should we chase this quarter?",
            tools=[PROJECT_SEARCH_TOOL],
            tool_executors={"search_projects": search_projects},
            tenant_id="demo-tenant",
            max_tool_rounds=3,
        )
        response = await gateway.send_prompt(request)

        print(response.content)
        for result in response.tool_results:
            print(f"  ran {result.tool}({result.input})")
        if response.round_limit_reached:
            print("Tool round limit reached")


if __name__ == "__main__":
    asyncio.run(ask_with_tools())
