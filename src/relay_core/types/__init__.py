"""Shared types for relay-core.

Import from here rather than submodules:
    from relay_core.types import LogLevel, TransportProtocol, ValidationResult
"""

from .enums import (
    InvocationStatus,
    LogFormat,
    LogLevel,
    ResponseKind,
    RunStatus,
    TransportProtocol,
)
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "TransportProtocol",
    "InvocationStatus",
    "RunStatus",
    "ResponseKind",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
