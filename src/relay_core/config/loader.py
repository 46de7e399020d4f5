"""Relay configuration loader."""

import os
import re
import typing
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

from relay_core.errors import create_error
from relay_core.types import LogLevel, TransportProtocol, ValidationIssue, ValidationResult

from .models import RelayConfig

VALID_TOP_LEVEL_KEYS = {
    "transports",
    "catalog",
    "generation",
    "execution",
    "logging",
    "telemetry",
}


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        RelayError: If required var not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)

        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        raise create_error(
            "CONFIG_INVALID",
            detail=f"Required environment variable {var_name} not set",
        )

    return re.sub(pattern, replacer, value)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    if isinstance(data, str):
        return resolve_env_vars(data)
    return data


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


class ConfigLoader:
    """Load and validate relay configuration."""

    def __init__(self, logger: Any = None):
        """Initialize config loader.

        Args:
            logger: Optional RelayLogger instance
        """
        self._config: RelayConfig | None = None
        self._config_path: Path | None = None
        self._logger = logger

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    def set_logger(self, logger: Any) -> None:
        """Attach a logger after construction."""
        self._logger = logger

    def load(self, path: str | Path | None = None, use_defaults: bool = True) -> RelayConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. RELAY_CONFIG_PATH environment variable
        2. ./relay-config.yaml
        3. ~/.relay/config.yaml
        4. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found

        Returns:
            Loaded RelayConfig instance

        Raises:
            RelayError: If file not found (when use_defaults=False) or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults:
                self._log("INFO", "No config file found, using default configuration")
                return self.load_defaults()
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail="Top level of the config file must be a mapping",
            )

        data = _resolve_env_vars_recursive(data)

        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> RelayConfig:
        """Load default configuration without a file."""
        return self.load_from_dict({})

    def load_from_dict(self, data: dict[str, Any], config_path: Path | None = None) -> RelayConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded RelayConfig instance

        Raises:
            RelayError: If configuration is invalid
        """
        validation = self.validate(data)
        for issue in validation.warnings:
            self._log("WARN", f"{issue.path}: {issue.message}")
        if not validation.valid:
            error_messages = [f"- {issue.path}: {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )

        try:
            config = self._dict_to_config(data)
        except (TypeError, ValueError) as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Failed to parse configuration: {e}",
            ) from e

        self._config = config
        self._config_path = config_path

        self._log("INFO", "Configuration loaded successfully")

        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        for key in data:
            if key not in VALID_TOP_LEVEL_KEYS:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        transports = data.get("transports", {})
        if not isinstance(transports, dict):
            errors.append(ValidationIssue(path="transports", message="must be a mapping"))
        else:
            for category, definition in transports.items():
                errors.extend(self._validate_transport(str(category), definition))

        execution = data.get("execution", {})
        if isinstance(execution, dict) and "max_concurrency" in execution:
            value = execution["max_concurrency"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(
                    ValidationIssue(
                        path="execution.max_concurrency",
                        message="max_concurrency must be an integer >= 1",
                    )
                )

        catalog = data.get("catalog", {})
        if isinstance(catalog, dict):
            for index, tool in enumerate(catalog.get("tools") or []):
                if not isinstance(tool, dict) or not tool.get("name") or not tool.get("category"):
                    errors.append(
                        ValidationIssue(
                            path=f"catalog.tools[{index}]",
                            message="tool entries need a name and a category",
                        )
                    )

        logging_section = data.get("logging", {})
        if isinstance(logging_section, dict) and "level" in logging_section:
            allowed = {level.value for level in LogLevel}
            if logging_section["level"] not in allowed:
                errors.append(
                    ValidationIssue(
                        path="logging.level",
                        message=f"level must be one of {sorted(allowed)}",
                    )
                )

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def _validate_transport(self, category: str, definition: Any) -> list[ValidationIssue]:
        path = f"transports.{category}"
        if not isinstance(definition, dict):
            return [ValidationIssue(path=path, message="must be a mapping")]

        issues: list[ValidationIssue] = []
        url = definition.get("url") or ""
        if url:
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                issues.append(
                    ValidationIssue(path=f"{path}.url", message=f"not an http(s) URL: {url}")
                )

        protocol = definition.get("protocol")
        if protocol is not None and protocol not in {p.value for p in TransportProtocol}:
            issues.append(
                ValidationIssue(path=f"{path}.protocol", message=f"unknown protocol: {protocol}")
            )

        for timeout_key in ("connect_timeout", "read_timeout"):
            if timeout_key in definition and not _is_positive_number(definition[timeout_key]):
                issues.append(
                    ValidationIssue(
                        path=f"{path}.{timeout_key}",
                        message=f"{timeout_key} must be a positive number",
                    )
                )
        return issues

    def get(self) -> RelayConfig:
        """Get current configuration.

        Raises:
            RelayError: If configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def _log(self, level: str, message: str) -> None:
        if self._logger:
            self._logger._log(LogLevel(level), "config", message)

    def _resolve_config_path(self) -> Path:
        env_path = os.environ.get("RELAY_CONFIG_PATH")
        if env_path:
            return Path(env_path)

        local_path = Path("relay-config.yaml")
        if local_path.exists():
            return local_path

        home_path = Path.home() / ".relay" / "config.yaml"
        if home_path.exists():
            return home_path

        return local_path

    def _dict_to_config(self, data: dict[str, Any]) -> RelayConfig:
        kwargs: dict[str, Any] = {}

        for config_field in fields(RelayConfig):
            if config_field.name in data and data[config_field.name] is not None:
                kwargs[config_field.name] = self._convert_field(
                    config_field.type, data[config_field.name]
                )

        return RelayConfig(**kwargs)

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        """Convert field value to appropriate type.

        Args:
            field_type: Expected field type
            value: Value to convert

        Returns:
            Converted value
        """
        if value is None:
            return None

        origin = typing.get_origin(field_type)

        if origin is list:
            if not isinstance(value, list):
                return value
            args = typing.get_args(field_type)
            if args:
                return [self._convert_field(args[0], item) for item in value]
            return value

        if origin is dict:
            if not isinstance(value, dict):
                return value
            args = typing.get_args(field_type)
            if args and len(args) == 2:
                value_type = args[1]
                return {k: self._convert_field(value_type, v or {}) for k, v in value.items()}
            return value

        if hasattr(field_type, "__dataclass_fields__"):
            if isinstance(value, dict):
                kwargs = {}
                for f in fields(field_type):
                    if f.name in value:
                        kwargs[f.name] = self._convert_field(f.type, value[f.name])
                return field_type(**kwargs)
            return value

        if isinstance(field_type, type) and issubclass(field_type, Enum):
            if isinstance(value, str):
                return field_type(value)
            return value

        return value


# Convenience singleton
_default_loader: ConfigLoader | None = None


def get_config_loader() -> ConfigLoader:
    """Get default config loader singleton."""
    global _default_loader  # noqa: PLW0603
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


def load_config(path: str | Path | None = None) -> RelayConfig:
    """Convenience function to load config.

    Args:
        path: Optional path to config file

    Returns:
        Loaded RelayConfig instance
    """
    return get_config_loader().load(path)
