"""Relay logging - component logging for catalog, transports and runs."""

from .colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from .logger import (
    LogConfig,
    RelayLogger,
    RunLogger,
    ToolCallLogger,
)

__all__ = [
    # Logger classes
    "RelayLogger",
    "RunLogger",
    "ToolCallLogger",
    "LogConfig",
    # Colors
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
