"""Configuration Package - environment-driven settings loaded with python-dotenv."""

from .settings import ConfigurationError, get_config

__all__ = ['ConfigurationError', 'get_config']
