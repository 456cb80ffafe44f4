import asyncio
import logging

from model_gateway import (
    AllProvidersFailedError,
    ClientTier,
    StandardRequest,
    TaskType,
    create_gateway,
)

logging.basicConfig(level=logging.INFO)


async def routed_prompts():
    # Reads ANTHROPIC_API_KEY / OPENAI_API_KEY from the environment or .env
    async with create_gateway() as gateway:
        print("Providers: ", gateway.get_provider_health())

        outreach = StandardRequest(
            task_type=TaskType.OUTREACH_GENERATION,
            prompt="Write a short intro email about our site logistics platform.",
            system_prompt="Draft a first-touch outreach email.",
            context={"accountName": "Turner Construction"},
        )
        government = StandardRequest(
            task_type=TaskType.DOCUMENT_SUMMARY,
            prompt="Summarize: the county approved the new transit bond.",
            client_tier=ClientTier.GOVERNMENT,
        )

        for request in (outreach, government):
            print("Estimate: ", gateway.estimate_cost(request))
            try:
                response = await gateway.send_prompt(request)
            except AllProvidersFailedError as exc:
                print("Failed: ", exc)
                continue
            print(f"{response.provider} ({response.model}): {response.content}")
            print("Usage: ", response.usage)

        print("Stats: ", gateway.get_stats())


if __name__ == "__main__":
    asyncio.run(routed_prompts())
