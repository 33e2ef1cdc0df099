"""
Structured Logging Configuration Module

This module configures structlog for the interpay package, routing events
through the standard library so applications keep control of handlers. JSON
output uses python-json-logger for log aggregation; console output uses the
structlog development renderer.

Key Features:
- structlog processors with level filtering, logger names and ISO timestamps
- python-json-logger formatting of structlog event dicts for aggregation
- Masking of card secrets and credentials found anywhere in an event dict
- Per-component logger levels (parse errors can be silenced independently)

Usage:
    from interpay.monitoring.logging import configure_logging, get_logger

    configure_logging()
    logger = get_logger("payments.checkout")
    logger.info("Request normalized", item_count=3)
"""

import logging
import sys
from typing import Any, Dict, List, Optional

import structlog
from pythonjsonlogger.json import JsonFormatter
from structlog.types import EventDict, WrappedLogger

from ..config.settings import BaseConfig, get_config
from ..utils.exceptions import REDACTED

# Event keys masked wherever they appear; compared lowercase
SENSITIVE_KEYS = frozenset({
    'number', 'verificationcode', 'verification_code', 'card_number',
    'cardnumber', 'cvv', 'cvc', 'password', 'secret', 'token',
})

ERRORS_LOGGER_NAME = 'interpay.errors'


class LoggingConfigurationError(Exception):
    """Custom exception for logging configuration validation errors."""
    pass


class InterpayJSONFormatter(JsonFormatter):
    """JSON formatter emitting level and logger name alongside event fields."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('fmt', '%(levelname)s %(name)s %(message)s')
        kwargs.setdefault('rename_fields', {'levelname': 'level', 'name': 'logger', 'message': 'event'})
        super().__init__(*args, **kwargs)


def _mask_value(value: Any) -> Any:
    return value if value is None else REDACTED


def _filter_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively mask sensitive keys in a dictionary."""
    filtered = {}
    for key, value in data.items():
        if isinstance(key, str) and key.lower() in SENSITIVE_KEYS:
            filtered[key] = _mask_value(value)
        elif isinstance(value, dict):
            filtered[key] = _filter_dict(value)
        elif isinstance(value, list):
            filtered[key] = [
                _filter_dict(item) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            filtered[key] = value
    return filtered


def filter_sensitive_data(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Mask card secrets and credentials in log entries.

    Args:
        logger: Wrapped logger instance
        method_name: Logging method name
        event_dict: Event dictionary to filter

    Returns:
        Filtered event dictionary with sensitive values replaced by REDACTED
    """
    return _filter_dict(event_dict)


class LoggingConfiguration:
    """
    Applies a configuration object's logging settings to the standard library
    and structlog.
    """

    def __init__(self, config: Optional[BaseConfig] = None):
        self.config = config or get_config()
        self.is_configured = False
        self._validate_configuration()

    def _validate_configuration(self) -> None:
        """
        Raises:
            LoggingConfigurationError: When configuration is incomplete
        """
        required_attrs = ['LOG_LEVEL', 'LOG_FORMAT', 'LOG_VALIDATION_FAILURES']
        missing_attrs = [attr for attr in required_attrs if not hasattr(self.config, attr)]

        if missing_attrs:
            raise LoggingConfigurationError(
                f"Missing required logging configuration: {', '.join(missing_attrs)}"
            )

    @property
    def use_json(self) -> bool:
        return self.config.LOG_FORMAT.lower() == 'json'

    def configure_structured_logging(self) -> None:
        """Configure stdlib handlers, then the structlog processor pipeline."""
        self._configure_stdlib_logging()

        processors: List[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            filter_sensitive_data,
        ]

        if self.use_json:
            # Event dict travels as LogRecord extras for the JSON formatter
            processors.append(structlog.stdlib.render_to_log_kwargs)
        else:
            processors[1:1] = [structlog.stdlib.add_logger_name, structlog.stdlib.add_log_level]
            processors.append(structlog.dev.ConsoleRenderer(colors=False))

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=False,
        )

        self.is_configured = True

    def _configure_stdlib_logging(self) -> None:
        logging.basicConfig(
            level=getattr(logging, self.config.LOG_LEVEL.upper()),
            handlers=self._create_log_handlers(),
            force=True
        )
        self._configure_component_loggers()

    def _create_log_handlers(self) -> List[logging.Handler]:
        handlers: List[logging.Handler] = []

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(self._create_formatter())
        handlers.append(console_handler)

        log_file = getattr(self.config, 'LOG_FILE', None)
        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(self._create_formatter())
            handlers.append(file_handler)

        return handlers

    def _create_formatter(self) -> logging.Formatter:
        if self.use_json:
            return InterpayJSONFormatter()
        return logging.Formatter(fmt='%(message)s')

    def _configure_component_loggers(self) -> None:
        errors_logger = logging.getLogger(ERRORS_LOGGER_NAME)
        if self.config.LOG_VALIDATION_FAILURES:
            errors_logger.setLevel(logging.NOTSET)
        else:
            errors_logger.setLevel(logging.CRITICAL + 1)


_logging_config: Optional[LoggingConfiguration] = None


def configure_logging(config: Optional[BaseConfig] = None) -> LoggingConfiguration:
    """
    Configure package logging. Call once at application start-up; passing a
    config object always reconfigures.

    Args:
        config: Configuration object, defaults to get_config()

    Returns:
        The applied LoggingConfiguration
    """
    global _logging_config

    if _logging_config is None or config is not None:
        _logging_config = LoggingConfiguration(config)
        _logging_config.configure_structured_logging()

    return _logging_config


def get_logger(name: str):
    """Get a structlog logger, configuring logging on first use."""
    if _logging_config is None:
        configure_logging()
    return structlog.get_logger(name)


__all__ = [
    'LoggingConfigurationError',
    'InterpayJSONFormatter',
    'LoggingConfiguration',
    'filter_sensitive_data',
    'configure_logging',
    'get_logger',
    'SENSITIVE_KEYS',
]
