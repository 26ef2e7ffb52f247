"""Manual multi-provider adapter backed by LiteLLM."""

from __future__ import annotations

from typing import TYPE_CHECKING

import litellm
import structlog
from litellm import acompletion

from prrisk.agents.base import BaseAdapter
from prrisk.errors import (
    ConfigError,
    SchemaError,
    SizeLimitError,
    TransportError,
    error_for_status,
)
from prrisk.types import ProviderId

if TYPE_CHECKING:
    from prrisk.config import PRRiskConfig

logger = structlog.get_logger()

# Provider → default model mapping
PROVIDER_DEFAULTS: dict[ProviderId, str] = {
    "groq": "llama-3.1-8b-instant",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-sonnet-4-20250514",
    "gemini": "gemini-2.0-flash",
    "deepseek": "deepseek-chat",
    "mistral": "mistral-large-latest",
}

# Provider → display name
PROVIDER_NAMES: dict[ProviderId, str] = {
    "groq": "Groq",
    "openai": "OpenAI",
    "anthropic": "Anthropic",
    "gemini": "Google Gemini",
    "deepseek": "DeepSeek",
    "mistral": "Mistral",
}

# Providers whose model names LiteLLM accepts without a prefix
_UNPREFIXED: frozenset[str] = frozenset({"openai", "anthropic"})


def litellm_model_name(provider: ProviderId, model: str) -> str:
    """Return the model identifier LiteLLM expects."""
    # Already provider-prefixed, e.g. "groq/llama-3.1-8b-instant"
    if "/" in model:
        return model
    if provider in _UNPREFIXED:
        return model
    return f"{provider}/{model}"


class ManualAdapter(BaseAdapter):
    """Adapter that uses LiteLLM to call any supported provider."""

    def __init__(self, config: PRRiskConfig) -> None:
        super().__init__(config)
        if not config.provider:
            raise ConfigError("Manual mode requires a provider. Set `provider` in .prriskrc.")
        self._provider: ProviderId = config.provider
        self._model = litellm_model_name(
            self._provider,
            config.model or PROVIDER_DEFAULTS[self._provider],
        )
        # None lets LiteLLM read the provider's own env var (GROQ_API_KEY, ...)
        self._api_key = config.api_key

    @property
    def model(self) -> str:
        return self._model

    @property
    def label(self) -> str:
        display = PROVIDER_NAMES.get(self._provider, self._provider)
        return f"{display} ({self._model})"

    async def _call_llm(self, system_prompt: str, user_prompt: str) -> str:
        try:
            response = await acompletion(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                api_key=self._api_key,
            )
        except (litellm.ContextWindowExceededError, litellm.RateLimitError) as e:
            raise SizeLimitError(
                f"{self.label} rejected the request: {type(e).__name__}",
                status_code=getattr(e, "status_code", None),
            ) from e
        except Exception as e:
            status = getattr(e, "status_code", None)
            message = f"{self.label} request failed: {type(e).__name__}: {e}"
            if isinstance(status, int):
                raise error_for_status(status, message) from e
            raise TransportError(message) from e

        try:
            content = response.choices[0].message.content  # type: ignore[union-attr]
        except (AttributeError, IndexError) as e:
            raise SchemaError(f"{self.label} returned no choices") from e
        if not content:
            raise SchemaError("No response from LLM")
        return content
