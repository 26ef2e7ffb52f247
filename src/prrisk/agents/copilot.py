"""GitHub Copilot adapter using the GitHub Models chat completions API."""

from __future__ import annotations

import os
import subprocess
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from prrisk.agents.base import BaseAdapter
from prrisk.errors import SchemaError, TransportError, error_for_status

if TYPE_CHECKING:
    from prrisk.config import PRRiskConfig

logger = structlog.get_logger()

GITHUB_MODELS_URL = "https://models.inference.ai.azure.com/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"
REQUEST_TIMEOUT = 120.0
_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def find_github_token() -> str:
    """Return a GitHub token from the environment or `gh auth token`.

    Raises:
        TransportError: if no token can be found.
    """
    for name in _TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            logger.debug("github_token_found", source=name)
            return token

    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
    except FileNotFoundError as e:
        raise TransportError("gh CLI not installed; set GITHUB_TOKEN instead") from e
    except subprocess.TimeoutExpired as e:
        raise TransportError("gh auth token timed out") from e

    token = result.stdout.strip()
    if result.returncode != 0 or not token:
        raise TransportError("gh CLI not authenticated. Run `gh auth login` or set GITHUB_TOKEN.")
    logger.debug("github_token_found", source="gh")
    return token


def _error_code(response: httpx.Response) -> str | None:
    """Pull the provider error code out of an error body, if there is one."""
    try:
        body: Any = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("code"), str):
            return error["code"]
    return None


class CopilotAdapter(BaseAdapter):
    """Adapter that calls the GitHub Models API using a gh CLI token."""

    def __init__(self, config: PRRiskConfig, token: str | None = None) -> None:
        super().__init__(config)
        self._token = token or config.api_key or find_github_token()
        self._model = config.model or DEFAULT_MODEL

    @property
    def model(self) -> str:
        return self._model

    @property
    def label(self) -> str:
        return f"Copilot ({self._model})"

    async def _call_llm(self, system_prompt: str, user_prompt: str) -> str:
        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as client:
                response = await client.post(
                    GITHUB_MODELS_URL,
                    json=payload,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            raise TransportError(f"GitHub Models request failed: {e}") from e

        if response.is_error:
            code = _error_code(response)
            logger.debug("llm_http_error", status=response.status_code, code=code)
            raise error_for_status(
                response.status_code,
                f"GitHub Models returned HTTP {response.status_code}"
                + (f" ({code})" if code else ""),
                code=code,
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise SchemaError("GitHub Models response has no message content") from e
        if not content:
            raise SchemaError("No response from LLM")
        return content
