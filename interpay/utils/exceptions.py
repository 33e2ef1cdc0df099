"""
Parse Error Classes for Payment Request Validation

This module provides the exception hierarchy raised by the field accessor, the
primitive validators and the composite validators. Validation is fail-fast: the
first missing or invalid field raises one of the two concrete error kinds and
aborts the whole call.

Classes:
    ParseError: Base class carrying error code, severity and filtered context
    MissingFieldError: A required key was absent from its containing object
    InvalidValueError: A present value failed its type or format check

Sensitive card values never reach these classes. Callers that validate card
data pass REDACTED in place of the offending value, so every error (and the
structured log entry it emits) is safe to surface as-is.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

import structlog

# Errors log on their own stdlib channel so LOG_VALIDATION_FAILURES can
# silence them; nothing is emitted until the application adds handlers
logger = structlog.wrap_logger(
    logging.getLogger("interpay.errors"),
    wrapper_class=structlog.stdlib.BoundLogger
)

# Placeholder carried instead of a card number or verification code
REDACTED = "REDACTED"


class ErrorSeverity(Enum):
    """Error severity levels for monitoring and alerting."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


def safe_str(value: Any, max_length: int = 100) -> str:
    """
    Safely convert value to string with length limits for error messages.

    Args:
        value: Value to convert to string
        max_length: Maximum string length

    Returns:
        Safe string representation
    """
    try:
        str_value = repr(value) if isinstance(value, str) else str(value)
        if len(str_value) > max_length:
            return str_value[:max_length] + "... [TRUNCATED]"
        return str_value
    except Exception:
        return "<unable to convert to string>"


class ParseError(Exception):
    """
    Base exception class for all payment request parse failures.

    Attributes:
        message (str): Human-readable error message
        error_code (str): Stable error identifier for client handling
        severity (ErrorSeverity): Error severity level for monitoring
        context (Dict[str, Any]): Error context with long values truncated
        timestamp (datetime): Error occurrence timestamp

    Example:
        try:
            consumer = get_consumer(request_data)
        except ParseError as e:
            return e.to_dict()
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.context = self._filter_context(context or {})
        self.timestamp = datetime.now(timezone.utc)

        self._log_exception()

    def _filter_context(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Truncate long context values so logs and responses stay bounded."""
        filtered_context = {}
        for key, value in context.items():
            if isinstance(value, str) and len(value) > 100:
                filtered_context[key] = value[:100] + "... [TRUNCATED]"
            else:
                filtered_context[key] = value
        return filtered_context

    def _log_exception(self) -> None:
        log_data = {
            'event_type': 'parse_error',
            'exception_class': self.__class__.__name__,
            'error_code': self.error_code,
            'severity': self.severity.value,
            'timestamp': self.timestamp.isoformat(),
            'context': self.context,
        }

        if self.severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL):
            logger.error(self.message, **log_data)
        elif self.severity == ErrorSeverity.MEDIUM:
            logger.warning(self.message, **log_data)
        else:
            logger.info(self.message, **log_data)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary representation safe for client exposure
        """
        return {
            'error': {
                'message': self.message,
                'code': self.error_code,
                'severity': self.severity.value,
                'timestamp': self.timestamp.isoformat(),
                'context': self.context,
            }
        }


class MissingFieldError(ParseError):
    """
    Raised when a required key is absent from its containing object.

    Presence is structural: a key holding None is present and is reported by
    the primitive validator as an InvalidValueError instead.
    """

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Missing required field: {key}",
            "MISSING_FIELD",
            context={'field': key}
        )
        self.key = key


class InvalidValueError(ParseError):
    """
    Raised when a present value fails its type or format check.

    Args:
        value: The offending value, or REDACTED for card secrets
        expected: Description of the expected type or format
    """

    def __init__(self, value: Any, expected: str) -> None:
        super().__init__(
            f"Invalid value for {expected}: {safe_str(value)}",
            "INVALID_VALUE",
            context={'expected': expected, 'value': safe_str(value)}
        )
        self.value = value
        self.expected = expected


__all__ = [
    'REDACTED',
    'ErrorSeverity',
    'ParseError',
    'MissingFieldError',
    'InvalidValueError',
    'safe_str',
]
