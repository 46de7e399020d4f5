"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, RelayError

# Context keys copied onto the RelayError instead of only feeding templates
_WIRE_FIELDS = ("status_code", "response_body", "remote_code")


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes."""
        return list(self._templates.keys())

    def register(self, template: ErrorTemplate) -> None:
        """Add or replace a template."""
        self._templates[template.code] = template

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: RelayError | None = None,
    ) -> RelayError:
        """Create error instance from template + context.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional cause error

        Returns:
            RelayError instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        detail = self._interpolate(template.detail_template, context)
        suggestion = self._interpolate(template.suggestion_template, context)

        if message is None:
            message = f"Error {code}"

        wire = {key: context.get(key) for key in _WIRE_FIELDS}

        return RelayError(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            retryable=template.default_retryable,
            tool_name=context.get("tool_name"),
            tool_category=context.get("tool_category"),
            run_id=context.get("run_id"),
            cause=cause,
            **wire,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except (KeyError, IndexError):
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # CATALOG Errors
        self._templates["TOOL_NOT_IN_CATALOG"] = ErrorTemplate(
            code="TOOL_NOT_IN_CATALOG",
            category=ErrorCategory.CATALOG,
            message_template="Tool '{tool_name}' is not in the catalog",
            suggestion_template="Register the tool or enable discovery for its category",
        )

        # TRANSPORT Errors
        self._templates["TRANSPORT_NOT_CONFIGURED"] = ErrorTemplate(
            code="TRANSPORT_NOT_CONFIGURED",
            category=ErrorCategory.TRANSPORT,
            message_template="Transport not configured for category: {tool_category}",
            suggestion_template="Configure transports.{tool_category}.url",
        )

        self._templates["HTTP_TRANSPORT_ERROR"] = ErrorTemplate(
            code="HTTP_TRANSPORT_ERROR",
            category=ErrorCategory.TRANSPORT,
            message_template="Request to tool server failed: {detail}",
            detail_template="{detail}",
            suggestion_template="Check that the tool server for '{tool_category}' is reachable",
            default_retryable=True,
        )

        self._templates["TOOL_TIMEOUT"] = ErrorTemplate(
            code="TOOL_TIMEOUT",
            category=ErrorCategory.TRANSPORT,
            message_template="Tool '{tool_name}' timed out",
            detail_template="{detail}",
            suggestion_template="Increase transports.{tool_category}.read_timeout or check the server",
            default_retryable=True,
        )

        # RESPONSE Errors
        self._templates["MALFORMED_RESPONSE"] = ErrorTemplate(
            code="MALFORMED_RESPONSE",
            category=ErrorCategory.RESPONSE,
            message_template="Tool server returned a malformed response: {detail}",
            detail_template="{detail}",
        )

        self._templates["EMPTY_RESPONSE"] = ErrorTemplate(
            code="EMPTY_RESPONSE",
            category=ErrorCategory.RESPONSE,
            message_template="Remote server returned an empty response",
            detail_template="The server may have redirected or returned no data",
            default_retryable=True,
        )

        self._templates["REMOTE_PROTOCOL_ERROR"] = ErrorTemplate(
            code="REMOTE_PROTOCOL_ERROR",
            category=ErrorCategory.RESPONSE,
            message_template="Tool server reported an error: {detail}",
            detail_template="{detail}",
        )

        # INFERENCE Errors
        self._templates["ARGUMENT_INFERENCE_FAILED"] = ErrorTemplate(
            code="ARGUMENT_INFERENCE_FAILED",
            category=ErrorCategory.INFERENCE,
            message_template="Could not build arguments for '{tool_name}': {detail}",
            detail_template="{detail}",
        )

        # EXECUTION Errors
        self._templates["RUN_FAILED"] = ErrorTemplate(
            code="RUN_FAILED",
            category=ErrorCategory.EXECUTION,
            message_template="Run failed: {detail}",
            detail_template="{detail}",
        )

        # CONFIG Errors
        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.CONFIG,
            message_template="Configuration is invalid: {detail}",
            detail_template="{detail}",
            suggestion_template="Fix the reported keys in the config file",
        )

        # SYSTEM Errors
        self._templates["INTERNAL_ERROR"] = ErrorTemplate(
            code="INTERNAL_ERROR",
            category=ErrorCategory.SYSTEM,
            message_template="Internal error: {detail}",
            detail_template="{error_type}: {detail}",
        )
