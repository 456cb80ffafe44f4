"""
Routing policy: maps request attributes to an ordered provider chain.

Rules are evaluated in declaration order and the first full match wins, so a
rule placed earlier takes precedence over any later rule that would also
match. Routing never looks at provider health; the gateway skips unavailable
providers while walking the chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from model_gateway.errors import ConfigurationError
from model_gateway.types import ClientTier, Priority, StandardRequest, TaskType

__all__ = [
    "RuleMatch",
    "RoutingRule",
    "RoutingPolicy",
    "DEFAULT_RULES",
    "DEFAULT_CHAIN",
]


@dataclass(frozen=True)
class RuleMatch:
    """Conjunction of request fields; a field left as None matches anything."""

    client_tier: Optional[Union[ClientTier, str]] = None
    task_type: Optional[Union[TaskType, str]] = None
    priority: Optional[Union[Priority, str]] = None

    def matches(self, request: StandardRequest) -> bool:
        if self.client_tier is not None and request.client_tier != self.client_tier:
            return False
        if self.task_type is not None and request.task_type != self.task_type:
            return False
        if self.priority is not None and request.priority != self.priority:
            return False
        return True


@dataclass(frozen=True)
class RoutingRule:
    match: RuleMatch
    providers: tuple[str, ...]
    strategy: Optional[str] = None
    reason: Optional[str] = None


class RoutingPolicy:
    """
    Ordered routing rules plus a default chain.

    Example:
        policy = RoutingPolicy(
            rules=[RoutingRule(RuleMatch(task_type="enrichment"), ("openai", "anthropic"))],
            default_chain=("anthropic", "openai"),
        )
        policy.route(StandardRequest(task_type="enrichment"))  # ("openai", "anthropic")
    """

    def __init__(
        self,
        rules: Sequence[RoutingRule] = (),
        default_chain: Sequence[str] = (),
    ) -> None:
        self._rules = tuple(rules)
        self._default_chain = tuple(default_chain)

        if not self._default_chain:
            raise ConfigurationError("Routing default chain must name at least one provider")
        for rule in self._rules:
            if not rule.providers:
                raise ConfigurationError(f"Routing rule {rule.match} has an empty provider chain")

    @property
    def rules(self) -> tuple[RoutingRule, ...]:
        return self._rules

    @property
    def default_chain(self) -> tuple[str, ...]:
        return self._default_chain

    def route(self, request: StandardRequest) -> tuple[str, ...]:
        """Return the ordered provider names to try for *request*."""
        for rule in self._rules:
            if rule.match.matches(request):
                return rule.providers
        return self._default_chain

    def provider_names(self) -> set[str]:
        """Every provider name referenced by a rule or the default chain."""
        names = set(self._default_chain)
        for rule in self._rules:
            names.update(rule.providers)
        return names


DEFAULT_RULES: tuple[RoutingRule, ...] = (
    # Government clients never go to Anthropic
    RoutingRule(
        match=RuleMatch(client_tier=ClientTier.GOVERNMENT),
        providers=("openai",),
        reason="Federal supply chain compliance",
    ),
    # Writing-heavy tasks: Claude first
    RoutingRule(
        match=RuleMatch(task_type=TaskType.OUTREACH_GENERATION),
        providers=("anthropic", "openai"),
        strategy="quality_first",
    ),
    RoutingRule(
        match=RuleMatch(task_type=TaskType.DEAL_ROOM_ARTIFACT),
        providers=("anthropic", "openai"),
        strategy="quality_first",
    ),
    RoutingRule(
        match=RuleMatch(task_type=TaskType.EVIDENCE_BUNDLE),
        providers=("anthropic", "openai"),
        strategy="quality_first",
    ),
    # Research/enrichment: GPT-4o first
    RoutingRule(
        match=RuleMatch(task_type=TaskType.ENRICHMENT),
        providers=("openai", "anthropic"),
        strategy="quality_first",
    ),
    RoutingRule(
        match=RuleMatch(task_type=TaskType.DOCUMENT_SUMMARY),
        providers=("anthropic", "openai"),
        strategy="cost_optimized",
    ),
)

DEFAULT_CHAIN: tuple[str, ...] = ("anthropic", "openai")
