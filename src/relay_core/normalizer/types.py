"""Response normalizer types."""

from dataclasses import dataclass
from typing import Any

from relay_core.types import ResponseKind


@dataclass(frozen=True)
class NormalizedResponse:
    """A tool server response reduced to result-or-error.

    ``output`` is the value to report: the JSON-RPC ``result`` (or the whole
    payload) for results, an ``{"error", "code"}`` object for remote errors,
    and an ``{"error", "message"}`` object for empty responses.
    """

    kind: ResponseKind
    output: Any
    error_code: str | None = None  # relay error code for non-results
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.kind == ResponseKind.RESULT
