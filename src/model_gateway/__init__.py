"""
Model Gateway - routed, failover-aware access to multiple LLM providers.
"""

from .config import Provider, ProviderConfig, get_api_key, load_provider_configs
from .errors import (
    AllProvidersFailedError,
    ConfigurationError,
    GatewayError,
    ProviderNotConfiguredError,
)
from .factory import build_adapters, create_adapter, create_gateway
from .gateway import GatewayOrchestrator
from .prompts import PromptTemplate, PromptVariantResolver
from .providers import (
    AnthropicProvider,
    GeminiProvider,
    OpenAIProvider,
    ProviderAdapter,
    ToolCapableAdapter,
)
from .response import StandardResponse, extract_json
from .routing import RoutingPolicy, RoutingRule, RuleMatch
from .tool_loop import ToolUseConversationLoop
from .types import (
    ChatMessage,
    ClientTier,
    Priority,
    StandardRequest,
    TaskType,
    ToolCallRequest,
    ToolInvocation,
    Usage,
)

__version__ = "0.1.0"

__all__ = [
    "Provider",
    "ProviderConfig",
    "get_api_key",
    "load_provider_configs",
    "AllProvidersFailedError",
    "ConfigurationError",
    "GatewayError",
    "ProviderNotConfiguredError",
    "build_adapters",
    "create_adapter",
    "create_gateway",
    "GatewayOrchestrator",
    "PromptTemplate",
    "PromptVariantResolver",
    "AnthropicProvider",
    "GeminiProvider",
    "OpenAIProvider",
    "ProviderAdapter",
    "ToolCapableAdapter",
    "StandardResponse",
    "extract_json",
    "RoutingPolicy",
    "RoutingRule",
    "RuleMatch",
    "ToolUseConversationLoop",
    "ChatMessage",
    "ClientTier",
    "Priority",
    "StandardRequest",
    "TaskType",
    "ToolCallRequest",
    "ToolInvocation",
    "Usage",
]
