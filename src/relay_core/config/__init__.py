"""Relay configuration - Config loading and models."""

from .loader import (
    ConfigLoader,
    deep_merge,
    get_config_loader,
    load_config,
    resolve_env_vars,
)
from .models import (
    CatalogConfig,
    ExecutionConfig,
    GenerationConfig,
    LoggingComponentsConfig,
    LoggingConfig,
    LoggingOptionsConfig,
    RelayConfig,
    TelemetryConfig,
    TelemetryMetricsConfig,
    TelemetryTracingConfig,
    ToolDefinitionConfig,
    TransportDefinition,
)

__all__ = [
    # Config models
    "RelayConfig",
    "TransportDefinition",
    "ToolDefinitionConfig",
    "CatalogConfig",
    "GenerationConfig",
    "ExecutionConfig",
    "LoggingConfig",
    "LoggingComponentsConfig",
    "LoggingOptionsConfig",
    "TelemetryConfig",
    "TelemetryMetricsConfig",
    "TelemetryTracingConfig",
    # Loader
    "ConfigLoader",
    "get_config_loader",
    "load_config",
    "resolve_env_vars",
    "deep_merge",
]
