"""ANSI color codes for terminal output.

Usage:
    from relay_core.logging.colors import GREEN, RED, RESET

    print(f"{GREEN}Success!{RESET}")
"""

RESET = "\033[0m"

# Status colors
GREEN = "\033[38;5;82m"  # Success
RED = "\033[38;5;196m"  # Failure
YELLOW = "\033[38;5;226m"  # Warnings
ORANGE = "\033[38;5;208m"  # Inference tiers

# Informational colors
LIGHT_BLUE = "\033[38;5;153m"  # Context payloads
CYAN = "\033[38;5;51m"  # Info
MAGENTA = "\033[38;5;201m"  # Run boundaries

__all__ = [
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
