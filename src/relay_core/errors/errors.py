"""Relay error types and matcher interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    CATALOG = "CATALOG"
    TRANSPORT = "TRANSPORT"
    RESPONSE = "RESPONSE"
    INFERENCE = "INFERENCE"
    EXECUTION = "EXECUTION"
    CONFIG = "CONFIG"
    SYSTEM = "SYSTEM"


@dataclass
class RelayError(Exception):
    """Structured error with context. Base exception for all relay errors."""

    # Identity
    code: str  # e.g., "HTTP_TRANSPORT_ERROR"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix

    # Context
    retryable: bool = False
    tool_name: str | None = None  # Which tool failed
    tool_category: str | None = None  # Which transport category was used
    run_id: str | None = None  # Run identifier

    # Wire details (transport and remote errors)
    status_code: int | None = None
    response_body: str | None = None
    remote_code: int | None = None

    cause: "RelayError | None" = None

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for reports and logs.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "retryable": self.retryable,
            "tool_name": self.tool_name,
            "tool_category": self.tool_category,
            "run_id": self.run_id,
            "status_code": self.status_code,
            "response_body": self.response_body,
            "remote_code": self.remote_code,
            "timestamp": self.timestamp.isoformat(),
            "cause": self.cause.to_dict() if self.cause else None,
        }

    def to_output(self) -> dict[str, Any]:
        """Render the error as the output payload of a failed tool result.

        Returns:
            JSON-like mapping describing the failure
        """
        if self.code == "HTTP_TRANSPORT_ERROR" and self.status_code is not None:
            return {
                "error": "Tool server error",
                "status": self.status_code,
                "message": self.response_body or "",
            }
        if self.code == "REMOTE_PROTOCOL_ERROR":
            return {
                "error": self.detail or self.message,
                "code": self.remote_code if self.remote_code is not None else -1,
            }
        output: dict[str, Any] = {"error": self.message}
        if self.suggestion:
            output["message"] = self.suggestion
        return output

    def with_context(
        self,
        tool_name: str | None = None,
        tool_category: str | None = None,
        run_id: str | None = None,
    ) -> "RelayError":
        """Return copy with additional context.

        Args:
            tool_name: Optional tool name
            tool_category: Optional transport category
            run_id: Optional run identifier

        Returns:
            New RelayError instance with updated context
        """
        return RelayError(
            code=self.code,
            category=self.category,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
            retryable=self.retryable,
            tool_name=tool_name or self.tool_name,
            tool_category=tool_category or self.tool_category,
            run_id=run_id or self.run_id,
            status_code=self.status_code,
            response_body=self.response_body,
            remote_code=self.remote_code,
            cause=self.cause,
            timestamp=self.timestamp,
        )


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "Tool '{tool_name}' timed out"
    detail_template: str | None = None
    suggestion_template: str | None = None
    default_retryable: bool = False


@dataclass
class MatchResult:
    """Result of matching an exception."""

    relay_code: str
    context: dict[str, Any]
    retryable: bool | None = None  # None = use template default


class ErrorMatcher(ABC):
    """Base class for exception matchers."""

    @abstractmethod
    def matches(self, error: Exception) -> bool:
        """Check if this matcher handles the error.

        Args:
            error: Exception to check

        Returns:
            True if this matcher can handle the error
        """

    @abstractmethod
    def extract(self, error: Exception) -> MatchResult:
        """Extract relay error info from the exception.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with error code and context
        """
