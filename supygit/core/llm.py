"""
LiteLLM wrapper used to draft commit messages.
"""

import logging
import re
import time
from typing import Any

import litellm
from litellm import completion
from litellm.exceptions import (
    APIConnectionError,
    APIError,
    AuthenticationError,
    BadRequestError,
    BudgetExceededError,
    ContextWindowExceededError,
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
)
from litellm.types.utils import ModelResponse

# Suppress LiteLLM debug messages (e.g., "Provider List: ...")
litellm.suppress_debug_info = True

logger = logging.getLogger(__name__)


# Map of provider prefixes to their expected API key env vars
_PROVIDER_KEY_HINTS: dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "google": "GOOGLE_API_KEY",
    "gemini": "GOOGLE_API_KEY",
    "mistral": "MISTRAL_API_KEY",
    "groq": "GROQ_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
}

# Raised immediately, no retry and no failover
_NON_TRANSIENT_ERRORS = (
    AuthenticationError,
    NotFoundError,
    BudgetExceededError,
    BadRequestError,
    ContextWindowExceededError,
)

# Retried with backoff, then the next model is tried
_TRANSIENT_ERRORS = (
    RateLimitError,
    ServiceUnavailableError,
    APIConnectionError,
    APIError,
)

_CREDIT_KEYWORDS = ("402", "credits", "insufficient", "budget")


def _extract_error_message(error: Exception) -> str:
    """Extract the most useful part of a LiteLLM error message."""
    msg = str(error)
    # OpenRouter-style errors embed a JSON message
    match = re.search(r'"message"\s*:\s*"([^"]+)"', msg)
    if match:
        return match.group(1)
    if len(msg) > 200:
        return msg[:200] + "..."
    return msg


class LLMError(Exception):
    """User-friendly LLM error with actionable guidance."""

    def __init__(self, message: str, original: Exception | None = None):
        self.original = original
        super().__init__(message)


def _friendly_llm_error(model: str, error: Exception | None) -> LLMError:
    """Convert a LiteLLM exception to a user-friendly error message."""
    provider = model.split("/")[0].lower()

    if isinstance(error, AuthenticationError):
        key_name = _PROVIDER_KEY_HINTS.get(provider, f"{provider.upper()}_API_KEY")
        return LLMError(
            f"Authentication failed for '{model}'. Check that {key_name} is set correctly.",
            original=error,
        )

    if isinstance(error, NotFoundError):
        return LLMError(
            f"Model '{model}' not found. Check the model name and provider.\n"
            f"  LiteLLM format: provider/model (e.g., openai/gpt-4o-mini)",
            original=error,
        )

    if isinstance(error, RateLimitError):
        return LLMError(
            f"Rate limit exceeded for '{model}'. Wait a moment and try again.",
            original=error,
        )

    if isinstance(error, BudgetExceededError):
        return LLMError(
            f"API budget/credits exhausted for '{model}'.",
            original=error,
        )

    if isinstance(error, ContextWindowExceededError):
        return LLMError(
            f"Context too large for '{model}'.",
            original=error,
        )

    if isinstance(error, BadRequestError):
        return LLMError(
            f"Model '{model}' rejected the request.\n"
            f"  Details: {_extract_error_message(error)}",
            original=error,
        )

    if isinstance(error, APIError):
        return LLMError(
            f"API error from {provider}: {_extract_error_message(error)}",
            original=error,
        )

    if isinstance(error, APIConnectionError):
        return LLMError(
            f"Cannot connect to {provider} API. Check your internet connection.",
            original=error,
        )

    if isinstance(error, ServiceUnavailableError):
        return LLMError(
            f"The {provider} API is temporarily unavailable. Try again in a moment.",
            original=error,
        )

    return LLMError(f"LLM error ({type(error).__name__}): {error}", original=error)


class LLMClient:
    """
    Wrapper around LiteLLM for consistent LLM access.

    Any provider LiteLLM supports works (openai/gpt-4o-mini,
    anthropic/claude-sonnet-4-5-20250929, ollama/llama3, ...).
    All failures surface as LLMError.
    """

    def __init__(
        self,
        model: str,
        temperature: float = 0.2,
        max_tokens: int | None = None,
        max_retries: int = 2,
        retry_delay: float = 1.0,
        retry_backoff: float = 2.0,
        fallback_models: list[str] | None = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.retry_backoff = retry_backoff
        self.fallback_models = fallback_models or []

    def chat(self, messages: list[dict[str, Any]]) -> ModelResponse:
        """
        Send a tool-less chat completion request with automatic retry and model failover.

        Tries the primary model with retries, then each fallback model in order.
        Non-transient errors (auth, model not found) raise immediately without failover.

        Args:
            messages: List of message dicts with 'role' and 'content'

        Returns:
            LiteLLM ModelResponse

        Raises:
            LLMError: When every model failed
        """
        models = [self.model] + self.fallback_models

        last_error: Exception | None = None
        for i, model in enumerate(models):
            if i > 0:
                logger.warning("Falling back to model: %s", model)

            result, error = self._try_model(model, messages)
            if result is not None:
                return result
            last_error = error

        raise _friendly_llm_error(self.model, last_error)

    def complete_text(self, messages: list[dict[str, Any]]) -> str:
        """Send a tool-less request and return the reply text ('' if none)."""
        response = self.chat(messages)
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError):
            return ""
        return content if isinstance(content, str) else ""

    def _try_model(
        self,
        model: str,
        messages: list[dict[str, Any]],
    ) -> tuple[ModelResponse | None, Exception | None]:
        """
        Try a single model with retries.

        Returns:
            (response, None) on success, or (None, last_error) on transient failure.
        """
        kwargs: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": self.temperature,
        }

        if self.max_tokens is not None:
            kwargs["max_tokens"] = self.max_tokens

        last_error: Exception | None = None
        delay = self.retry_delay

        for attempt in range(self.max_retries + 1):
            try:
                return completion(**kwargs), None
            except _NON_TRANSIENT_ERRORS as e:
                raise _friendly_llm_error(model, e) from e
            except _TRANSIENT_ERRORS as e:
                # Credit/budget errors masquerade as connection or API errors
                if any(kw in str(e).lower() for kw in _CREDIT_KEYWORDS):
                    raise _friendly_llm_error(model, e) from e
                last_error = e
                if attempt < self.max_retries:
                    logger.warning(
                        "LLM call failed (attempt %d/%d, model %s): %s. Retrying in %.1fs...",
                        attempt + 1,
                        self.max_retries + 1,
                        model,
                        e,
                        delay,
                    )
                    time.sleep(delay)
                    delay *= self.retry_backoff
            except Exception as e:
                raise _friendly_llm_error(model, e) from e

        return None, last_error
