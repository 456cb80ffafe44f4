"""
Gateway exceptions, plus translation of noisy provider SDK exceptions into
short messages for failover logging.
"""

from __future__ import annotations

import logging
from typing import Final, Optional, Sequence, Type

import anthropic
import openai

__all__ = [
    "GatewayError",
    "ConfigurationError",
    "ProviderNotConfiguredError",
    "AllProvidersFailedError",
    "classify_error",
]


class GatewayError(RuntimeError):
    """Base gateway exception.

    Attributes:
        original_exc: The underlying provider exception, if any.
    """

    original_exc: Optional[BaseException]

    def __init__(self, message: str, original_exc: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.original_exc = original_exc
        if original_exc is not None:
            self.__cause__ = original_exc


class ConfigurationError(GatewayError):
    """Routing tables reference a provider that has no registered adapter."""


class ProviderNotConfiguredError(GatewayError):
    """A call was made on an adapter whose credentials are missing."""


class AllProvidersFailedError(GatewayError):
    """Every provider in the failover chain was skipped or failed.

    Attributes:
        last_error: The most recent provider exception, or None when no
            provider in the chain was eligible to take the call.
        attempted: Names of the providers that were actually invoked.
    """

    def __init__(
        self,
        last_error: Optional[BaseException],
        attempted: Sequence[str] = (),
    ) -> None:
        if last_error is None:
            message = "All LLM providers failed. Last error: no configured provider could handle the request"
        else:
            message = f"All LLM providers failed. Last error: {last_error}"
        super().__init__(message, last_error)
        self.last_error = last_error
        self.attempted = tuple(attempted)


RATE_LIMIT_ERRORS: Final[tuple[Type[Exception], ...]] = (
    openai.RateLimitError,
    anthropic.RateLimitError,
)

CONN_ERRORS: Final[tuple[Type[Exception], ...]] = (
    openai.APIConnectionError,
    anthropic.APIConnectionError,
    TimeoutError,
    ConnectionError,
)

API_ERRORS: Final[tuple[Type[Exception], ...]] = (
    openai.APIError,
    anthropic.APIError,
)


def classify_error(exc: BaseException, logger: Optional[logging.Logger] = None) -> str:
    """
    Classify an exception raised by a provider call.

    Args:
        exc: The caught exception
        logger: Logger for recording the error

    Returns:
        Formatted error message string
    """
    log = logger or logging.getLogger(__name__)

    if isinstance(exc, RATE_LIMIT_ERRORS):
        msg = f"Rate limit error: {exc}"
    elif isinstance(exc, CONN_ERRORS):
        msg = f"Connection error: {exc}"
    elif isinstance(exc, API_ERRORS):
        status_info = getattr(exc, "status_code", "unknown")
        msg = f"API error ({status_info}): {exc}"
    else:
        msg = f"{type(exc).__name__}: {exc}"

    log.debug("Classified provider exception", exc_info=exc)
    return msg
