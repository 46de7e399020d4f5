"""Error factory for creating RelayErrors from any exception type."""

from typing import Any

from .errors import RelayError
from .matchers import ErrorMatcherChain
from .registry import ErrorRegistry


class ErrorFactory:
    """Creates RelayErrors from any exception type."""

    def __init__(
        self,
        registry: ErrorRegistry | None = None,
        matcher_chain: ErrorMatcherChain | None = None,
    ):
        """Initialize error factory.

        Args:
            registry: Error registry (defaults to new ErrorRegistry())
            matcher_chain: Matcher chain (defaults to new ErrorMatcherChain())
        """
        self.registry = registry or ErrorRegistry()
        self.matcher_chain = matcher_chain or ErrorMatcherChain()

    def from_exception(
        self,
        error: Exception,
        tool_name: str | None = None,
        tool_category: str | None = None,
        run_id: str | None = None,
    ) -> RelayError:
        """Convert any exception to RelayError.

        Args:
            error: Exception to convert
            tool_name: Optional tool name
            tool_category: Optional transport category
            run_id: Optional run identifier

        Returns:
            RelayError instance
        """
        if isinstance(error, RelayError):
            return error.with_context(
                tool_name=tool_name,
                tool_category=tool_category,
                run_id=run_id,
            )

        match_result = self.matcher_chain.match(error)

        context = match_result.context.copy()
        if tool_name:
            context["tool_name"] = tool_name
        if tool_category:
            context["tool_category"] = tool_category
        if run_id:
            context["run_id"] = run_id

        relay_error = self.registry.create(
            code=match_result.relay_code,
            context=context,
        )

        if match_result.retryable is not None:
            relay_error.retryable = match_result.retryable

        return relay_error

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> RelayError:
        """Create RelayError directly from code.

        Args:
            code: Error code
            context: Context variables for template interpolation
            **kwargs: Additional context variables

        Returns:
            RelayError instance
        """
        merged_context = dict(context or {})
        merged_context.update(kwargs)

        return self.registry.create(code=code, context=merged_context)


# Convenience singleton
_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Get default error factory singleton."""
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, **context: Any) -> RelayError:
    """Convenience function to create error.

    Args:
        code: Error code
        **context: Context variables for template interpolation

    Returns:
        RelayError instance
    """
    return get_error_factory().create(code, context)
