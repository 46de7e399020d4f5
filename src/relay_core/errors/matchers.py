"""Error matchers for converting exceptions to RelayErrors."""

import asyncio
import json
from typing import Any

import httpx

from .errors import ErrorMatcher, MatchResult


class TimeoutErrorMatcher(ErrorMatcher):
    """Matches client-side timeouts (httpx and asyncio)."""

    def matches(self, error: Exception) -> bool:
        """Check if error is a timeout error."""
        return isinstance(error, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError))

    def extract(self, error: Exception) -> MatchResult:
        """Extract timeout error info.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with TOOL_TIMEOUT code
        """
        return MatchResult(
            relay_code="TOOL_TIMEOUT",
            context={"detail": str(error) or type(error).__name__},
        )


class HTTPStatusErrorMatcher(ErrorMatcher):
    """Matches non-2xx responses raised via ``Response.raise_for_status``."""

    def matches(self, error: Exception) -> bool:
        """Check if error carries an HTTP status."""
        return isinstance(error, httpx.HTTPStatusError)

    def extract(self, error: Exception) -> MatchResult:
        """Extract status code and body.

        Args:
            error: httpx.HTTPStatusError to extract from

        Returns:
            MatchResult with HTTP_TRANSPORT_ERROR code
        """
        assert isinstance(error, httpx.HTTPStatusError)
        status = error.response.status_code
        return MatchResult(
            relay_code="HTTP_TRANSPORT_ERROR",
            context={
                "detail": f"HTTP {status}",
                "status_code": status,
                "response_body": error.response.text,
            },
            # Client errors will not change on a second attempt
            retryable=status >= 500,
        )


class RequestErrorMatcher(ErrorMatcher):
    """Matches network-level failures (connect, DNS, protocol)."""

    def matches(self, error: Exception) -> bool:
        """Check if error is an httpx transport failure."""
        return isinstance(error, httpx.RequestError)

    def extract(self, error: Exception) -> MatchResult:
        """Extract network error info.

        Args:
            error: httpx.RequestError to extract from

        Returns:
            MatchResult with HTTP_TRANSPORT_ERROR code and no status
        """
        return MatchResult(
            relay_code="HTTP_TRANSPORT_ERROR",
            context={"detail": f"{type(error).__name__}: {error}"},
        )


class JSONDecodeErrorMatcher(ErrorMatcher):
    """Matches JSON parse failures."""

    def matches(self, error: Exception) -> bool:
        """Check if error is a JSON decode failure."""
        return isinstance(error, json.JSONDecodeError)

    def extract(self, error: Exception) -> MatchResult:
        """Extract decode error info.

        Args:
            error: json.JSONDecodeError to extract from

        Returns:
            MatchResult with MALFORMED_RESPONSE code
        """
        return MatchResult(
            relay_code="MALFORMED_RESPONSE",
            context={"detail": str(error)},
            retryable=False,
        )


class GenericErrorMatcher(ErrorMatcher):
    """Fallback matcher for any exception."""

    def matches(self, error: Exception) -> bool:
        """Always matches."""
        return True

    def extract(self, error: Exception) -> MatchResult:
        """Extract generic error info.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with INTERNAL_ERROR code
        """
        context: dict[str, Any] = {
            "detail": str(error),
            "error_type": type(error).__name__,
        }
        return MatchResult(
            relay_code="INTERNAL_ERROR",
            context=context,
            retryable=False,
        )


class ErrorMatcherChain:
    """Ordered chain of matchers. First match wins."""

    def __init__(self) -> None:
        """Initialize matcher chain with built-in matchers."""
        self.matchers: list[ErrorMatcher] = []
        self._load_builtin_matchers()

    def add(self, matcher: ErrorMatcher) -> None:
        """Insert a matcher ahead of the generic fallback."""
        self.matchers.insert(len(self.matchers) - 1, matcher)

    def match(self, error: Exception) -> MatchResult:
        """Find first matching matcher and extract result.

        Args:
            error: Exception to match

        Returns:
            MatchResult from first matching matcher
        """
        for matcher in self.matchers:
            if matcher.matches(error):
                return matcher.extract(error)

        # Unreachable while GenericErrorMatcher is last
        return MatchResult(
            relay_code="INTERNAL_ERROR",
            context={"detail": str(error), "error_type": type(error).__name__},
            retryable=False,
        )

    def _load_builtin_matchers(self) -> None:
        """Load built-in matchers in priority order."""
        # TimeoutException is a RequestError subclass, so it goes first
        self.matchers = [
            TimeoutErrorMatcher(),
            HTTPStatusErrorMatcher(),
            RequestErrorMatcher(),
            JSONDecodeErrorMatcher(),
            GenericErrorMatcher(),  # Fallback - must be last
        ]
