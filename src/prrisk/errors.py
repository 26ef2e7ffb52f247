"""Error taxonomy shared by the adapters and the analysis engine.

Adapters are the only place where provider failures are classified. They
raise one of the tagged exceptions below based on structured data (HTTP
status, provider error code, provider exception class); the engine only
ever looks at ``kind``.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Failure classes the engine knows how to react to."""

    SIZE_LIMIT = "size_limit"
    SCHEMA = "schema"
    TRANSPORT = "transport"
    INPUT = "input"


# Payload too large / rate or tokens-per-minute quota exceeded
SIZE_LIMIT_STATUSES = frozenset({413, 429})

# Provider error codes that mean the request was too big for the quota
SIZE_LIMIT_CODES = frozenset({
    "tokens_limit_reached",
    "context_length_exceeded",
    "rate_limit_exceeded",
    "request_too_large",
})


class PRRiskError(Exception):
    """Base class for all PRRisk failures."""

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SizeLimitError(PRRiskError):
    """The request exceeded a provider size or throughput limit. Recoverable by splitting."""

    kind = ErrorKind.SIZE_LIMIT


class SchemaError(PRRiskError):
    """The completion payload is not a valid risk assessment."""

    kind = ErrorKind.SCHEMA


class TransportError(PRRiskError):
    """Network, auth or any other provider failure."""

    kind = ErrorKind.TRANSPORT


class InputError(PRRiskError):
    """The diff itself is unusable (empty, unreadable)."""

    kind = ErrorKind.INPUT


class ConfigError(InputError):
    """Configuration file or environment values are invalid."""


def error_for_status(status_code: int, message: str, code: str | None = None) -> PRRiskError:
    """Map an HTTP status (and optional provider error code) to a tagged error."""
    if status_code in SIZE_LIMIT_STATUSES or (code is not None and code in SIZE_LIMIT_CODES):
        return SizeLimitError(message, status_code=status_code)
    return TransportError(message, status_code=status_code)
