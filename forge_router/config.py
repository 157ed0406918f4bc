"""Configuration management for the Forge router.

This module provides the RouterConfig class that holds router settings,
loaded from defaults, environment variables, YAML files, and runtime
overrides, in that order.
"""

import logging
import os
from dataclasses import dataclass, field
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, List, Type, Union

import yaml


def validate_config(func):
    """Decorator to validate configuration values."""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        result = func(self, *args, **kwargs)
        self._validate()
        return result
    return wrapper


def _is_path(value: str) -> None:
    if value and not value.startswith("/"):
        raise ValueError(f"Route path must start with '/': {value!r}")


def _is_log_level(value: str) -> None:
    if value is None:
        return
    if not isinstance(logging.getLevelName(value.upper()), int):
        raise ValueError(f"Unknown log level: {value!r}")


@dataclass
class ConfigValue:
    """Configuration value with type information and validation."""
    value: Any
    type: Type
    required: bool = True
    default: Any = None
    validators: List[Callable[[Any], None]] = field(default_factory=list)

    def validate(self) -> None:
        """Validate the configuration value."""
        if self.required and self.value is None:
            raise ValueError("Required configuration value is missing")
        if self.value is not None and not isinstance(self.value, self.type):
            raise TypeError(f"Expected {self.type}, got {type(self.value)}")
        for validator in self.validators:
            validator(self.value)


class RouterConfig:
    """Configuration for Forge routers.

    Environment variables use a prefix, ``FORGE_ROUTER_`` by default, so
    ``FORGE_ROUTER_DIRECTORY=/app`` sets ``directory``.
    """

    def __init__(self, env_prefix: str = "FORGE_ROUTER_") -> None:
        """Initialize a new configuration instance.

        Args:
            env_prefix: Prefix for environment variables.
        """
        self._env_prefix = env_prefix
        self._values: Dict[str, ConfigValue] = {}
        self._load_defaults()
        self.load_env()

    def _load_defaults(self) -> None:
        """Load default configuration values."""
        self._values = {
            "default": ConfigValue("/index", str, True, validators=[_is_path]),
            "directory": ConfigValue("", str, False),
            "log_level": ConfigValue("INFO", str, False, validators=[_is_log_level]),
            "debug": ConfigValue(False, bool, False),
        }

    @validate_config
    def load_file(self, path: Union[str, Path]) -> None:
        """Load configuration from a YAML file.

        Unknown keys are ignored.

        Args:
            path: Path to the configuration file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file does not contain a mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            config = yaml.safe_load(f)

        if config is None:
            return
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a dictionary")

        # Allow the settings to live under a "router" section
        config = config.get("router", config)
        if config is None:
            return
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a dictionary")
        for key, value in config.items():
            if key in self._values:
                self._values[key].value = value

    @validate_config
    def load_env(self) -> None:
        """Load configuration from environment variables."""
        for key in self._values:
            value = os.getenv(f"{self._env_prefix}{key.upper()}")
            if value is not None:
                self._values[key].value = self._convert_value(value, self._values[key].type)

    def _convert_value(self, value: str, target_type: Type) -> Any:
        """Convert a string value to the target type."""
        if target_type == bool:
            return value.lower() in ("true", "1", "yes")
        elif target_type == int:
            return int(value)
        elif target_type == str:
            return value
        else:
            raise TypeError(f"Unsupported type: {target_type}")

    def _validate(self) -> None:
        """Validate all configuration values."""
        for value in self._values.values():
            value.validate()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        if key in self._values:
            return self._values[key].value
        return default

    @validate_config
    def set(self, key: str, value: Any) -> None:
        """Set a configuration value.

        Raises:
            KeyError: If the key is not a router setting.
        """
        if key not in self._values:
            raise KeyError(f"Unknown configuration key: {key}")
        self._values[key].value = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {key: value.value for key, value in self._values.items()}

    def configure_logging(self) -> logging.Logger:
        """Apply ``log_level`` to the ``forge_router`` logger.

        No handlers are installed; output goes wherever the application sends it.
        """
        logger = logging.getLogger("forge_router")
        logger.setLevel(self.log_level.upper())
        return logger

    @property
    def default(self) -> str:
        """Get the default route path."""
        return self.get("default", "/index")

    @property
    def directory(self) -> str:
        """Get the directory prefix."""
        return self.get("directory", "")

    @property
    def log_level(self) -> str:
        """Get log level."""
        return self.get("log_level") or "INFO"

    @property
    def debug(self) -> bool:
        """Get debug mode status."""
        return self.get("debug", False)
