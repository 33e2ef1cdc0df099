"""
Utils Package - Field access, primitive validators and parse errors.

Module Organization:
- exceptions: ParseError hierarchy and the REDACTED placeholder
- validators: field accessor, primitive format validators and null filter
"""

from .exceptions import (
    REDACTED,
    ErrorSeverity,
    InvalidValueError,
    MissingFieldError,
    ParseError,
    safe_str,
)
from .validators import *  # noqa: F401,F403
from .validators import __all__ as _validators_all

__all__ = [
    'REDACTED',
    'ErrorSeverity',
    'InvalidValueError',
    'MissingFieldError',
    'ParseError',
    'safe_str',
] + list(_validators_all)
