"""
Pytest configuration and shared fixtures for relay tests.
"""

import io
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from relay_core.catalog import Tool, ToolCatalog  # noqa: E402
from relay_core.logging import LogConfig, RelayLogger  # noqa: E402
from relay_core.telemetry import reset_telemetry  # noqa: E402
from relay_core.types import LogFormat, LogLevel  # noqa: E402


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def log_stream() -> io.StringIO:
    """Capture logger output."""
    return io.StringIO()


@pytest.fixture
def json_logger(log_stream: io.StringIO) -> RelayLogger:
    """Debug-level JSON logger writing to log_stream."""
    return RelayLogger(LogConfig(level=LogLevel.DEBUG, format=LogFormat.JSON, output=log_stream))


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def jira_tool() -> Tool:
    return Tool.create(
        name="mcp_jira_call_jira_rest_api",
        category="jira",
        description="Call any Jira REST API endpoint",
        capabilities=["jira", "rest", "issue"],
        required_inputs=["endpoint", "method"],
    )


@pytest.fixture
def catalog(jira_tool: Tool) -> ToolCatalog:
    """In-memory catalog holding the Jira REST tool."""
    tool_catalog = ToolCatalog()
    tool_catalog.register(jira_tool)
    return tool_catalog


# =============================================================================
# Telemetry Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_telemetry():
    """Telemetry state is global; never leak it between tests."""
    reset_telemetry()
    yield
    reset_telemetry()


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "catalog: Tool catalog tests")
    config.addinivalue_line("markers", "transport: Transport tests")
    config.addinivalue_line("markers", "inference: Argument inference tests")
    config.addinivalue_line("markers", "orchestrator: Execution orchestrator tests")
