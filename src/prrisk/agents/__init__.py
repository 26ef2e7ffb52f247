"""Adapter factory: pick the completion client for the configured agent."""

from __future__ import annotations

from prrisk.agents.base import BaseAdapter
from prrisk.agents.copilot import CopilotAdapter
from prrisk.agents.manual import ManualAdapter
from prrisk.config import PRRiskConfig
from prrisk.errors import ConfigError


def create_adapter(config: PRRiskConfig) -> BaseAdapter:
    """Instantiate the completion-client adapter for the given config."""
    match config.agent:
        case "copilot":
            return CopilotAdapter(config)
        case "manual":
            return ManualAdapter(config)
        case _:
            raise ConfigError(f"Unknown agent mode: {config.agent}")


__all__ = ["BaseAdapter", "CopilotAdapter", "ManualAdapter", "create_adapter"]
