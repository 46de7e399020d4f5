"""Response normalizer."""

from .normalizer import EMPTY_RESPONSE_OUTPUT, ResponseNormalizer, extract_text
from .types import NormalizedResponse

__all__ = [
    "ResponseNormalizer",
    "NormalizedResponse",
    "EMPTY_RESPONSE_OUTPUT",
    "extract_text",
]
