"""Relay configuration data models."""

from dataclasses import dataclass, field

from relay_core.types import LogFormat, LogLevel, TransportProtocol


@dataclass
class TransportDefinition:
    """Connection settings for one tool category's server."""

    url: str = ""
    protocol: TransportProtocol = TransportProtocol.JSONRPC
    token: str = ""
    # Provider header carrying the token, e.g. X-JIRA-TOKEN or X-Webex-Token
    token_header: str | None = None
    connect_timeout: float = 10.0
    read_timeout: float = 30.0
    follow_redirects: bool = True

    @property
    def configured(self) -> bool:
        return bool(self.url and self.url.strip())


@dataclass
class ToolDefinitionConfig:
    """A tool declared in the config file."""

    name: str
    category: str
    description: str = ""
    capabilities: list[str] = field(default_factory=list)
    required_inputs: list[str] = field(default_factory=list)
    remote_name: str | None = None


@dataclass
class CatalogConfig:
    """Tool catalog configuration."""

    store_path: str | None = None  # YAML file; None = in-memory only
    seed_builtin: bool = True
    discovery_enabled: bool = False
    tools: list[ToolDefinitionConfig] = field(default_factory=list)


@dataclass
class GenerationConfig:
    """LLM argument generation configuration."""

    enabled: bool = False
    base_url: str | None = None  # OpenAI-compatible endpoint; None = api.openai.com
    api_key: str = ""
    model: str = "gpt-4o-mini"
    temperature: float = 0.0
    timeout: float = 30.0
    max_tokens: int = 512


@dataclass
class ExecutionConfig:
    """Run execution configuration."""

    max_concurrency: int = 1  # 1 = sequential


@dataclass
class LoggingComponentsConfig:
    """Per-component logging switches."""

    run: bool = True
    tool: bool = True
    catalog: bool = True
    transport: bool = True
    inference: bool = True
    config: bool = True


@dataclass
class LoggingOptionsConfig:
    """Logging options configuration."""

    show_params: bool = True
    show_results: bool = True
    truncate_at: int = 200


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    components: LoggingComponentsConfig = field(default_factory=LoggingComponentsConfig)
    options: LoggingOptionsConfig = field(default_factory=LoggingOptionsConfig)


@dataclass
class TelemetryMetricsConfig:
    """Telemetry metrics configuration (OpenTelemetry)."""

    enabled: bool = True
    prometheus_enabled: bool = True


@dataclass
class TelemetryTracingConfig:
    """Telemetry tracing configuration (OpenTelemetry).

    Attributes:
        enabled: Whether tracing is enabled
        sample_rate: Sampling rate (0.0 to 1.0, 1.0 = sample all)
    """

    enabled: bool = False
    sample_rate: float = 1.0


@dataclass
class TelemetryConfig:
    """Telemetry configuration."""

    enabled: bool = True
    service_name: str = "relay"
    service_version: str = "0.1.0"
    metrics: TelemetryMetricsConfig = field(default_factory=TelemetryMetricsConfig)
    tracing: TelemetryTracingConfig = field(default_factory=TelemetryTracingConfig)


@dataclass
class RelayConfig:
    """Root configuration object."""

    transports: dict[str, TransportDefinition] = field(default_factory=dict)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
