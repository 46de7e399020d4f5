"""Argument inference types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ArgumentTier(str, Enum):
    """Which tier produced a tool call's arguments."""

    EXPLICIT = "explicit"
    GENERATED = "generated"
    HEURISTIC = "heuristic"


class JiraOperation(str, Enum):
    """Operations the heuristic tier can shape for the generic Jira REST tool."""

    FETCH = "fetch"
    SEARCH = "search"
    COMMENT = "comment"
    UPDATE_FIELD = "update_field"
    ASSIGN = "assign"
    TRANSITIONS = "transitions"


@dataclass
class InferredArguments:
    """Arguments for one call plus the tier that produced them."""

    arguments: dict[str, Any] = field(default_factory=dict)
    tier: ArgumentTier = ArgumentTier.HEURISTIC
