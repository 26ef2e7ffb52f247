"""Configuration loading and validation for PRRisk."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, get_args

from pydantic import BaseModel, Field, ValidationError, model_validator

from prrisk.errors import ConfigError
from prrisk.types import AgentMode, ProviderId, ReportFormat

CONFIG_FILENAME = ".prriskrc"

# Env var(s) → config field. The first variable that is set wins.
_ENV_STRINGS: dict[str, tuple[str, ...]] = {
    "provider": ("PRRISK_PROVIDER", "LLM_PROVIDER"),
    "model": ("PRRISK_MODEL", "LLM_MODEL"),
}

_ENV_NUMBERS: dict[str, tuple[str, ...]] = {
    "max_diff_chars": ("PRRISK_MAX_DIFF_CHARS",),
    "chunk_chars": ("PRRISK_CHUNK_CHARS",),
    "min_chunk_chars": ("PRRISK_MIN_CHUNK_CHARS",),
    "max_concurrent": ("PRRISK_MAX_CONCURRENT",),
}


class PRRiskConfig(BaseModel):
    """Root configuration model, mapping 1:1 to .prriskrc JSON."""

    agent: AgentMode = "manual"
    provider: ProviderId | None = "groq"
    model: str | None = None
    api_key: str | None = Field(None, alias="apiKey")

    # Size management
    max_diff_chars: int = Field(100_000, gt=0, alias="maxDiffChars")
    chunk_chars: int = Field(24_000, gt=0, alias="chunkChars")
    min_chunk_chars: int = Field(1_500, gt=0, alias="minChunkChars")
    shrink_factor: int = Field(4, ge=2, alias="shrinkFactor")
    chunking: bool = True
    max_concurrent: int = Field(1, ge=1, alias="maxConcurrent")
    skip_malformed_chunks: bool = Field(False, alias="skipMalformedChunks")

    # Completion parameters
    temperature: float = Field(0.3, ge=0.0, le=2.0)
    max_tokens: int = Field(1000, gt=0, alias="maxTokens")

    report_format: ReportFormat = Field("markdown", alias="reportFormat")
    report_dir: str = Field(".prrisk/reports", alias="reportDir")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_budgets(self) -> PRRiskConfig:
        if self.chunk_chars >= self.max_diff_chars:
            raise ValueError(
                f"chunkChars ({self.chunk_chars}) must be smaller than "
                f"maxDiffChars ({self.max_diff_chars})"
            )
        if self.min_chunk_chars > self.chunk_chars:
            raise ValueError(
                f"minChunkChars ({self.min_chunk_chars}) must not exceed "
                f"chunkChars ({self.chunk_chars})"
            )
        return self

    def to_rc_dict(self) -> dict[str, Any]:
        """Serialize to the JSON structure used in .prriskrc."""
        return self.model_dump(by_alias=True, exclude_none=True)


def _parse_number(value: str | None) -> int | None:
    """Parse a positive integer, returning None for anything else."""
    if not value:
        return None
    try:
        n = int(value)
    except ValueError:
        return None
    return n if n > 0 else None


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect config overrides from environment variables."""
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}

    for field_name, names in _ENV_STRINGS.items():
        for name in names:
            value = env.get(name)
            if value:
                overrides[field_name] = value
                break

    if "provider" in overrides:
        provider = overrides["provider"].lower()
        valid = get_args(ProviderId)
        if provider not in valid:
            raise ConfigError(
                f"Invalid LLM provider: {overrides['provider']}. "
                f"Must be one of: {', '.join(valid)}"
            )
        overrides["provider"] = provider

    for field_name, names in _ENV_NUMBERS.items():
        for name in names:
            number = _parse_number(env.get(name))
            if number is not None:
                overrides[field_name] = number
                break

    return overrides


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk up from `start` (default: cwd) to find .prriskrc."""
    current = (start or Path.cwd()).resolve()
    for directory in [current, *current.parents]:
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> PRRiskConfig:
    """Load config from .prriskrc (or defaults) and apply environment overrides."""
    config_path = path or find_config_file()
    raw: dict[str, Any] = {}
    if config_path is not None and config_path.is_file():
        try:
            raw = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"{config_path} is not valid JSON: {e}") from e

    try:
        base = PRRiskConfig.model_validate(raw)
        merged = {**base.model_dump(), **env_overrides(environ)}
        return PRRiskConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def apply_overrides(config: PRRiskConfig, **overrides: Any) -> PRRiskConfig:
    """Return a re-validated copy of `config` with non-None overrides applied."""
    updates = {k: v for k, v in overrides.items() if v is not None}
    if not updates:
        return config
    try:
        return PRRiskConfig.model_validate({**config.model_dump(), **updates})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def save_config(config: PRRiskConfig, directory: Path | None = None) -> Path:
    """Write config to .prriskrc in the given directory (default: cwd)."""
    target = (directory or Path.cwd()) / CONFIG_FILENAME
    target.write_text(
        json.dumps(config.to_rc_dict(), indent=2) + "\n",
        encoding="utf-8",
    )
    return target
