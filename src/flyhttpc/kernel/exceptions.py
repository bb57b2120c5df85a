"""Unified exception hierarchy for flyhttpc.

All adapter exceptions inherit from FlyHttpcException, so callers can catch
one type for every failure the adapter itself raises. Errors that belong to
the engine's own taxonomy (httpx errors, for instance) are never wrapped and
reach the caller unchanged.

Categories:
- AdapterException: Malformed adapter input (e.g. multipart descriptors)
- InfrastructureException: Engine-side network failures
"""

from __future__ import annotations

# Stable code for every connection-establishment failure.
ECONNREFUSED = "econnrefused"


# =============================================================================
# Base Exception
# =============================================================================


class FlyHttpcException(Exception):
    """Base exception for all flyhttpc errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "econnrefused").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Adapter Exceptions
# =============================================================================


class AdapterException(FlyHttpcException):
    """Invalid input handed to the adapter."""


class MultipartException(AdapterException):
    """A multipart descriptor could not be turned into headers or a body."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(FlyHttpcException):
    """Network-level failures surfaced by the engine."""


class EngineConnectException(InfrastructureException):
    """Raised by an engine when a connection could not be established.

    ``reason`` carries the engine's own failure detail (DNS failure, TCP
    refusal, TLS handshake error, ...).
    """

    def __init__(self, message: str, reason: object = None) -> None:
        super().__init__(message, code="failed_connect", context={"reason": reason})
        self.reason = reason


class ConnectionRefusedException(InfrastructureException):
    """The engine could not reach the target host.

    Every connection-establishment failure collapses into this one error with
    ``code == "econnrefused"``.
    """

    def __init__(self, message: str = "connection refused", context: dict | None = None) -> None:
        super().__init__(message, code=ECONNREFUSED, context=context)
