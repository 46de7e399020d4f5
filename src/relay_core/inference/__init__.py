"""Argument inference - explicit, generated and heuristic call arguments."""

from .extraction import build_jql, detect_operation, extract_issue_key
from .generation import (
    GeneratedArguments,
    GenerationPort,
    OpenAIArgumentGenerator,
    extract_json_object,
    parse_generated_arguments,
)
from .heuristics import HeuristicArgumentBuilder
from .hints import call_shape_reference
from .pipeline import ArgumentInferencePipeline
from .types import ArgumentTier, InferredArguments, JiraOperation

__all__ = [
    "ArgumentInferencePipeline",
    "ArgumentTier",
    "InferredArguments",
    # Heuristics
    "HeuristicArgumentBuilder",
    "JiraOperation",
    "extract_issue_key",
    "detect_operation",
    "build_jql",
    # Generation
    "GenerationPort",
    "OpenAIArgumentGenerator",
    "GeneratedArguments",
    "extract_json_object",
    "parse_generated_arguments",
    "call_shape_reference",
]
