"""
Configuration management for the AI.YOU client.

Settings come from schema defaults, a .env.local file, environment
variables and CLI arguments, validated with Pydantic.
"""

from .loader import ConfigError, ConfigLoader
from .schema import ConfigSchema

__all__ = ["ConfigError", "ConfigSchema", "ConfigLoader"]
