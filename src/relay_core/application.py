"""Relay Application - wires every component from configuration.

Initialization sequence:

1. Config loading
2. Logger setup
3. Telemetry setup
4. Error registry
5. Transports (one per configured category)
6. Tool catalog (store + seed tools, optional discovery)
7. Argument inference (generator when enabled, heuristics always)
8. Execution orchestrator
"""

import dataclasses
import os
import sys
from typing import Any, TextIO

from relay_core.catalog import (
    Tool,
    ToolCatalog,
    ToolDiscovery,
    YamlCatalogStore,
    builtin_tools,
)
from relay_core.catalog.store import CatalogStore
from relay_core.config import ConfigLoader
from relay_core.config.models import RelayConfig
from relay_core.errors import ErrorFactory, ErrorRegistry
from relay_core.inference import ArgumentInferencePipeline, OpenAIArgumentGenerator
from relay_core.logging import LogConfig, RelayLogger
from relay_core.orchestrator import ExecutionOrchestrator, ExecutionReport
from relay_core.telemetry import setup_telemetry
from relay_core.transport import TransportRegistry
from relay_core.types import LogLevel


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() == "true"


class RelayApplication:
    """Owns the component graph for one process."""

    def __init__(
        self,
        config_path: str | None = None,
        log_output: TextIO | None = None,
        config: RelayConfig | None = None,
    ):
        """Initialize application.

        Args:
            config_path: Path to config file (optional)
            log_output: Output stream for logs (default: sys.stdout)
            config: Pre-built configuration; skips file loading when given
        """
        self._config_path = config_path
        self._log_output = log_output or sys.stdout
        self._initialized = False

        self.config_loader: ConfigLoader | None = None
        self.config: RelayConfig | None = config
        self.logger: RelayLogger | None = None
        self.error_registry: ErrorRegistry | None = None
        self.error_factory: ErrorFactory | None = None
        self.transports: TransportRegistry | None = None
        self.catalog: ToolCatalog | None = None
        self.generator: OpenAIArgumentGenerator | None = None
        self.inference: ArgumentInferencePipeline | None = None
        self.orchestrator: ExecutionOrchestrator | None = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Initialize all components. Calling twice is a no-op."""
        if self._initialized:
            return

        # 1. Config
        self.config_loader = ConfigLoader()
        if self.config is None:
            self.config = self.config_loader.load(self._config_path)
        config = self.config

        # 2. Logger
        log_config = LogConfig(
            level=config.logging.level,
            format=config.logging.format,
            show_params=config.logging.options.show_params,
            show_results=config.logging.options.show_results,
            truncate_at=config.logging.options.truncate_at,
            components=dataclasses.asdict(config.logging.components),
            output=self._log_output,
        )
        self.logger = RelayLogger(log_config)
        self.config_loader.set_logger(self.logger)

        # 3. Telemetry
        telemetry_config = dataclasses.replace(
            config.telemetry,
            enabled=_env_flag("RELAY_TELEMETRY_ENABLED") or config.telemetry.enabled,
            service_name=os.environ.get("OTEL_SERVICE_NAME", config.telemetry.service_name),
        )
        setup_telemetry(telemetry_config)

        # 4. Errors
        self.error_registry = ErrorRegistry()
        self.error_factory = ErrorFactory(self.error_registry)

        # 5. Transports
        self.transports = TransportRegistry.from_config(config.transports, logger=self.logger)

        # 6. Catalog
        self.catalog = ToolCatalog(logger=self.logger)
        store: CatalogStore | None = None
        if config.catalog.store_path:
            store = YamlCatalogStore(config.catalog.store_path)
        self.catalog.load(store, self._seed_tools(config))

        if config.catalog.discovery_enabled:
            discovery = ToolDiscovery(self.catalog, self.transports, logger=self.logger)
            await discovery.discover()

        # 7. Inference
        if config.generation.enabled:
            self.generator = OpenAIArgumentGenerator(config.generation, logger=self.logger)
        self.inference = ArgumentInferencePipeline(
            generator=self.generator,
            logger=self.logger,
        )

        # 8. Orchestrator
        self.orchestrator = ExecutionOrchestrator(
            self.catalog,
            self.transports,
            self.inference,
            error_factory=self.error_factory,
            logger=self.logger,
            max_concurrency=config.execution.max_concurrency,
        )

        self._initialized = True
        self.logger._log(
            LogLevel.INFO,
            "config",
            "Relay initialized",
            {
                "tools": len(self.catalog),
                "transports": self.transports.categories(),
                "generation": self.generator is not None,
            },
        )

    def _seed_tools(self, config: RelayConfig) -> list[Tool]:
        tools = builtin_tools() if config.catalog.seed_builtin else []
        for definition in config.catalog.tools:
            tools.append(
                Tool.create(
                    name=definition.name,
                    category=definition.category,
                    description=definition.description,
                    capabilities=definition.capabilities,
                    required_inputs=definition.required_inputs,
                    remote_name=definition.remote_name,
                )
            )
        return tools

    async def execute_task(
        self,
        allowed_tools: list[str],
        query: str,
        explicit_inputs: dict[str, Any] | None = None,
        agent_name: str = "agent",
    ) -> ExecutionReport:
        """Run a task through the orchestrator (initializing on first use)."""
        if not self._initialized:
            await self.initialize()
        assert self.orchestrator is not None
        return await self.orchestrator.execute_task(
            allowed_tools, query, explicit_inputs, agent_name=agent_name
        )

    async def shutdown(self) -> None:
        """Close transports and the generator client."""
        if self.transports is not None:
            await self.transports.aclose()
        if self.generator is not None:
            await self.generator.aclose()
        self._initialized = False
