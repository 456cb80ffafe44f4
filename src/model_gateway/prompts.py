"""
Provider-specific prompt variants.

Claude responds best to tag-structured instructions; GPT-style models to plain
prose with explicit JSON output instructions. Templates are keyed by
``(task_type, provider_name)``; a missing template means the request is sent
unchanged.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Optional

from model_gateway.types import StandardRequest, TaskType

__all__ = ["PromptTemplate", "PromptVariantResolver", "DEFAULT_TEMPLATES"]

Context = Optional[Mapping[str, Any]]
PromptWrapper = Callable[[str, Context], str]


@dataclass(frozen=True)
class PromptTemplate:
    system_wrapper: Optional[PromptWrapper] = None
    user_wrapper: Optional[PromptWrapper] = None


class PromptVariantResolver:
    """Rewrites a request's prompts into the shape a provider prefers."""

    def __init__(
        self, templates: Optional[Mapping[str, Mapping[str, PromptTemplate]]] = None
    ) -> None:
        self._templates = DEFAULT_TEMPLATES if templates is None else templates

    def template_for(self, task_type: str, provider_name: str) -> Optional[PromptTemplate]:
        return self._templates.get(task_type, {}).get(provider_name)

    def adapt(self, request: StandardRequest, provider_name: str) -> StandardRequest:
        """
        Return *request* with provider-specific prompts.

        Only ``system_prompt`` and ``prompt`` are ever rewritten, and only by
        the wrappers the template defines. Without a template the same
        request object is returned.
        """
        template = self.template_for(request.task_type, provider_name)
        if template is None:
            return request

        changes: dict[str, Any] = {}
        if template.system_wrapper is not None:
            changes["system_prompt"] = template.system_wrapper(
                request.system_prompt or "", request.context
            )
        if template.user_wrapper is not None:
            changes["prompt"] = template.user_wrapper(request.prompt or "", request.context)

        if not changes:
            return request
        return replace(request, **changes)


def _account_name(ctx: Context) -> str:
    return (ctx or {}).get("accountName") or (ctx or {}).get("account_name") or "Unknown"


def _context_json(ctx: Context) -> str:
    return json.dumps(dict(ctx or {}), default=str)


def _outreach_anthropic(base: str, ctx: Context) -> str:
    return f"""<role>You are a senior BD outreach specialist for commercial construction.</role>
<task>{base}</task>
<context>
  <account>{_account_name(ctx)}</account>
  <industry>Commercial Construction / AEC</industry>
</context>
<rules>
  <rule>Reference specific project details when available</rule>
  <rule>Never use: delve, leverage, seamless, transformative</rule>
  <rule>Keep subject lines under 50 characters</rule>
  <rule>Include one clear CTA</rule>
</rules>"""


def _outreach_openai(base: str, ctx: Context) -> str:
    return f"""You are a senior BD outreach specialist for commercial construction.

Task: {base}

Context:
- Account: {_account_name(ctx)}
- Industry: Commercial Construction / AEC

Rules:
- Reference specific project details when available
- Never use: delve, leverage, seamless, transformative
- Keep subject lines under 50 characters
- Include one clear CTA

Respond with a JSON object: {{ subject, preheader, body, cta }}"""


def _enrichment_anthropic(base: str, ctx: Context) -> str:
    return f"""<role>You are a construction industry research analyst.</role>
<task>Research and enrich the following account for BD targeting.</task>
<output_format>Return JSON with: company_overview, key_contacts, recent_projects, potential_pain_points, estimated_revenue_range</output_format>
<context>{_context_json(ctx)}</context>"""


def _enrichment_openai(base: str, ctx: Context) -> str:
    return f"""You are a construction industry research analyst.

Research and enrich the following account for BD targeting.

Return a JSON object with these fields:
- company_overview: string
- key_contacts: array of {{name, title, relevance}}
- recent_projects: array of {{name, value, status}}
- potential_pain_points: array of strings
- estimated_revenue_range: string

Context: {_context_json(ctx)}"""


def _ask_plexi_anthropic(base: str, ctx: Context) -> str:
    return f"""<role>You are Ask Plexi, an AI assistant for construction business development executives.</role>
<personality>Direct, data-driven, construction-industry fluent. You know GCs, subs, owners, OZ deals, BID districts.</personality>
<constraints>
  <constraint>Never use: delve, leverage, seamless, transformative</constraint>
  <constraint>Prefer tables for comparisons</constraint>
  <constraint>Cite specific data when available</constraint>
</constraints>
{base}"""


def _ask_plexi_openai(base: str, ctx: Context) -> str:
    return f"""You are Ask Plexi, an AI assistant for construction business development executives.

Personality: Direct, data-driven, construction-industry fluent. You know GCs, subs, owners, OZ deals, BID districts.

Rules:
- Never use: delve, leverage, seamless, transformative
- Prefer tables for comparisons
- Cite specific data when available

{base}"""


DEFAULT_TEMPLATES: dict[str, dict[str, PromptTemplate]] = {
    TaskType.OUTREACH_GENERATION: {
        "anthropic": PromptTemplate(system_wrapper=_outreach_anthropic),
        "openai": PromptTemplate(system_wrapper=_outreach_openai),
    },
    TaskType.ENRICHMENT: {
        "anthropic": PromptTemplate(system_wrapper=_enrichment_anthropic),
        "openai": PromptTemplate(system_wrapper=_enrichment_openai),
    },
    TaskType.ASK_PLEXI: {
        "anthropic": PromptTemplate(system_wrapper=_ask_plexi_anthropic),
        "openai": PromptTemplate(system_wrapper=_ask_plexi_openai),
    },
}
