"""Shared enumerations for relay-core."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class TransportProtocol(str, Enum):
    """Wire protocol spoken by a category's tool server."""

    JSONRPC = "jsonrpc"
    REST = "rest"


class InvocationStatus(str, Enum):
    """Outcome of a single tool invocation."""

    SUCCESS = "success"
    ERROR = "error"


class RunStatus(str, Enum):
    """Outcome of a whole run."""

    COMPLETED = "completed"
    FAILED = "failed"


class ResponseKind(str, Enum):
    """Shape of a normalized tool server response."""

    RESULT = "result"
    REMOTE_ERROR = "remote_error"
    EMPTY = "empty"
