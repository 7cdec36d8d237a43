"""Configuration manager for loading and validating .retryable-http.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from retryable_http.domain.config import AcceptanceConfig, AppConfig, RetryConfig, TransportConfig
from retryable_http.domain.errors import ConfigFileError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".retryable-http.yml"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "RETRYABLE_HTTP_MAX_ATTEMPTS": ("retry", "max_attempts"),
    "RETRYABLE_HTTP_DELAY": ("retry", "delay"),
    "RETRYABLE_HTTP_TIMEOUT": ("transport", "timeout"),
}


class ConfigManager:
    """Manages configuration from .retryable-http.yml and environment variables

    Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .retryable-http.yml file (searched from current directory upwards)
    3. Environment variables (RETRYABLE_HTTP_*)
    4. CLI arguments (handled by CLI layer)
    """

    DEFAULT_CONFIG = {
        "retry": {
            "max_attempts": 1,
            "delay": 0.0,
        },
        "acceptance": {
            "min_status": 200,
            "max_status": 299,
        },
        "transport": {
            "timeout": None,
            "headers": {},
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to config file (searches from current dir if None)

        Raises:
            ConfigFileError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                msg = error["msg"]
                errors.append(f"  - {field}: {msg}")
            raise ConfigFileError(
                "Configuration validation failed:\n" + "\n".join(errors)
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        """Find config file starting from current directory

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and validate with Pydantic

        Raises:
            ConfigFileError: If the file cannot be read or parsed
            ValidationError: If configuration is invalid
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path:
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigFileError(f"Failed to load config from {self.config_path}: {e}") from e
            if not isinstance(file_config, dict):
                raise ConfigFileError(f"Config file {self.config_path} must contain a mapping")
            config_dict = self._merge_config(config_dict, file_config)
            logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)

        return AppConfig(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries"""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides

        Values are passed through as strings; Pydantic coerces and validates them.
        """
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                logger.debug(f"Overriding {section}.{key} from {env_name}")
                config.setdefault(section, {})[key] = value
        return config

    def get_retry_config(self) -> RetryConfig:
        """Get retry configuration"""
        return self.config.retry

    def get_acceptance_config(self) -> AcceptanceConfig:
        """Get acceptance configuration"""
        return self.config.acceptance

    def get_transport_config(self) -> TransportConfig:
        """Get transport configuration"""
        return self.config.transport
