"""Monitoring Package - structlog configuration and sensitive data masking."""

from .logging import configure_logging, filter_sensitive_data, get_logger

__all__ = ['configure_logging', 'filter_sensitive_data', 'get_logger']
