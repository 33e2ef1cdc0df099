"""
Configuration for the interpay parsing package.

Settings come from environment variables, optionally loaded from a .env file
with python-dotenv. Only ambient concerns are configurable here (environment
name and logging); validation rules themselves are fixed.

Environment variables:
    INTERPAY_ENV: development | testing | production (default: development)
    INTERPAY_DEBUG: Enable debug mode
    LOG_LEVEL: DEBUG | INFO | WARNING | ERROR | CRITICAL
    LOG_FORMAT: json | console
    LOG_FILE: Optional log file path
    LOG_VALIDATION_FAILURES: Emit a log entry for every parse error
"""

import logging
import os
from typing import Any, Dict, Optional, Type

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
VALID_LOG_FORMATS = ('json', 'console')


class ConfigurationError(Exception):
    """Custom exception for configuration validation errors."""
    pass


class EnvironmentManager:
    """
    Environment variable access with python-dotenv loading and type coercion.
    """

    def __init__(self, env_file: Optional[str] = None):
        """
        Args:
            env_file: Optional path to .env file, defaults to auto-discovery
        """
        self.env_file = env_file or find_dotenv(usecwd=True)
        self._load_environment_variables()

    def _load_environment_variables(self) -> None:
        """
        Load environment variables from the .env file, keeping values that are
        already set in the process environment.

        Raises:
            ConfigurationError: When environment loading fails
        """
        if not self.env_file:
            return
        try:
            load_dotenv(self.env_file, override=False)
            logger.debug("Environment variables loaded from %s", self.env_file)
        except OSError as e:
            raise ConfigurationError(f"Failed to load environment variables: {str(e)}")

    def get_optional_env(self, key: str, default: Any = None, var_type: type = str) -> Any:
        """
        Get optional environment variable with default value and type validation.

        Args:
            key: Environment variable name
            default: Default value if variable is not set
            var_type: Expected variable type for validation

        Returns:
            Environment variable value or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            if var_type == bool:
                return value.lower() in ('true', '1', 'yes', 'on')
            elif var_type == int:
                return int(value)
            else:
                return var_type(value)
        except (ValueError, TypeError):
            logger.warning("Invalid type for '%s', using default: %s", key, default)
            return default


class BaseConfig:
    """
    Base configuration shared by every environment.
    """

    ENVIRONMENT = 'base'

    def __init__(self, env_file: Optional[str] = None):
        self.env_manager = EnvironmentManager(env_file)
        self._configure_base_settings()
        self._configure_logging_settings()
        self._apply_environment_overrides()
        self._validate_configuration()

    def _configure_base_settings(self) -> None:
        self.DEBUG = self.env_manager.get_optional_env('INTERPAY_DEBUG', False, bool)

    def _configure_logging_settings(self) -> None:
        """Configure structured logging settings (structlog)."""
        self.LOG_LEVEL = self.env_manager.get_optional_env('LOG_LEVEL', 'INFO').upper()
        self.LOG_FORMAT = self.env_manager.get_optional_env('LOG_FORMAT', 'json').lower()
        self.LOG_FILE = self.env_manager.get_optional_env('LOG_FILE')
        self.LOG_VALIDATION_FAILURES = self.env_manager.get_optional_env(
            'LOG_VALIDATION_FAILURES', True, bool
        )

    def _apply_environment_overrides(self) -> None:
        """Override in subclasses for environment-specific defaults."""
        pass

    def _validate_configuration(self) -> None:
        """
        Raises:
            ConfigurationError: When a logging setting has an unsupported value
        """
        if self.LOG_LEVEL not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid LOG_LEVEL '{self.LOG_LEVEL}', expected one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        if self.LOG_FORMAT not in VALID_LOG_FORMATS:
            raise ConfigurationError(
                f"Invalid LOG_FORMAT '{self.LOG_FORMAT}', expected one of: {', '.join(VALID_LOG_FORMATS)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ENVIRONMENT': self.ENVIRONMENT,
            'DEBUG': self.DEBUG,
            'LOG_LEVEL': self.LOG_LEVEL,
            'LOG_FORMAT': self.LOG_FORMAT,
            'LOG_FILE': self.LOG_FILE,
            'LOG_VALIDATION_FAILURES': self.LOG_VALIDATION_FAILURES,
        }


class DevelopmentConfig(BaseConfig):
    """Development defaults: verbose, human-readable logs."""

    ENVIRONMENT = 'development'

    def _apply_environment_overrides(self) -> None:
        self.DEBUG = True
        if os.getenv('LOG_LEVEL') is None:
            self.LOG_LEVEL = 'DEBUG'
        if os.getenv('LOG_FORMAT') is None:
            self.LOG_FORMAT = 'console'


class TestingConfig(BaseConfig):
    """Testing defaults: quiet console logs."""

    ENVIRONMENT = 'testing'

    def _apply_environment_overrides(self) -> None:
        self.LOG_LEVEL = 'WARNING'
        self.LOG_FORMAT = 'console'
        self.LOG_FILE = None


class ProductionConfig(BaseConfig):
    """Production defaults: JSON logs for aggregation."""

    ENVIRONMENT = 'production'

    def _apply_environment_overrides(self) -> None:
        self.DEBUG = False
        if os.getenv('LOG_LEVEL') is None:
            self.LOG_LEVEL = 'WARNING'
        if os.getenv('LOG_FORMAT') is None:
            self.LOG_FORMAT = 'json'


CONFIG_CLASSES: Dict[str, Type[BaseConfig]] = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def get_config(config_name: Optional[str] = None) -> BaseConfig:
    """
    Configuration factory returning a fresh environment-specific configuration.

    Args:
        config_name: Optional configuration name override; defaults to the
            INTERPAY_ENV environment variable, then 'development'

    Raises:
        ConfigurationError: When an unknown configuration name is provided
    """
    config_name = (config_name or os.getenv('INTERPAY_ENV', 'development')).lower()
    config_class = CONFIG_CLASSES.get(config_name)
    if config_class is None:
        raise ConfigurationError(
            f"Unknown configuration '{config_name}', expected one of: {', '.join(CONFIG_CLASSES)}"
        )
    return config_class()


__all__ = [
    'ConfigurationError',
    'EnvironmentManager',
    'BaseConfig',
    'DevelopmentConfig',
    'TestingConfig',
    'ProductionConfig',
    'get_config',
]
