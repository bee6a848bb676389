"""
Schema-driven configuration loader.

This module provides a ConfigLoader that uses the configuration schema
to load, validate, and merge configuration from multiple sources.
"""

import logging
import os
import typing
from argparse import ArgumentParser, Namespace
from typing import Any, Dict, Mapping, Optional, Type

from dotenv import load_dotenv
from pydantic import ValidationError

from .schema import ConfigSchema

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = ".env.local"


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""


def _schema_extra(field_info) -> Dict[str, Any]:
    return field_info.json_schema_extra or {}


def _clean(value: Any) -> Any:
    """Strip strings; an explicit empty string clears the value."""
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ConfigLoader:
    """Loads and validates configuration using a schema-driven approach."""

    @staticmethod
    def load(
        schema: Type[ConfigSchema] = ConfigSchema,
        cli_args: Optional[Namespace] = None,
        cli_overrides: Optional[Mapping[str, Any]] = None,
        env_file: str = DEFAULT_ENV_FILE,
    ) -> ConfigSchema:
        """
        Load configuration from all sources with precedence handling.

        Loading order (lowest to highest priority):
        1. Schema defaults
        2. The env file (.env.local), never overriding the real environment
        3. OS environment variables
        4. CLI arguments
        5. Direct overrides keyed by environment variable name

        Args:
            schema: The configuration schema class to use
            cli_args: Parsed CLI arguments (if available)
            cli_overrides: Overrides keyed by env var name
            env_file: Path of the dotenv file to read

        Returns:
            Validated configuration instance

        Raises:
            ConfigError: If configuration validation fails
        """
        config_dict: Dict[str, Any] = {}

        _load_from_dotenv_file(env_file)

        for field_name, field_info in schema.model_fields.items():
            env_var = _schema_extra(field_info).get("env_var")
            if env_var:
                env_value = os.getenv(env_var)
                if env_value is not None and env_value.strip():
                    config_dict[field_name] = env_value.strip()

        if cli_args is not None:
            for field_name, field_info in schema.model_fields.items():
                cli_arg = _schema_extra(field_info).get("cli_arg")
                if cli_arg and hasattr(cli_args, cli_arg):
                    cli_value = getattr(cli_args, cli_arg)
                    if cli_value is not None:
                        config_dict[field_name] = _clean(cli_value)

        if cli_overrides:
            for field_name, field_info in schema.model_fields.items():
                env_var = _schema_extra(field_info).get("env_var")
                if env_var in cli_overrides and cli_overrides[env_var] is not None:
                    config_dict[field_name] = _clean(cli_overrides[env_var])

        # Cleared values fall back to the schema default
        config_dict = {k: v for k, v in config_dict.items() if v is not None}

        try:
            config = schema(**config_dict)
        except ValidationError as e:
            errors = []
            for error in e.errors():
                loc = error.get("loc") or ()
                if loc:
                    field_info = schema.model_fields.get(loc[0])
                    name = _schema_extra(field_info).get("env_var") if field_info else str(loc[0]).upper()
                else:
                    name = "credentials"
                errors.append(f"{name}: {error['msg']}")

            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {err}" for err in errors)
            raise ConfigError(error_msg) from e

        logger.debug(f"Configuration loaded: {config.masked()}")
        return config

    @staticmethod
    def add_schema_arguments(parser: ArgumentParser, schema: Type[ConfigSchema] = ConfigSchema) -> ArgumentParser:
        """Add one optional argument per schema field that declares a cli_arg."""
        group = parser.add_argument_group("connection settings")
        for field_name, field_info in schema.model_fields.items():
            extra = _schema_extra(field_info)
            cli_arg = extra.get("cli_arg")
            if not cli_arg:
                continue

            kwargs: Dict[str, Any] = {
                "dest": cli_arg,
                "help": field_info.description or f"Override {extra.get('env_var', field_name.upper())} env var",
                "default": None,  # Schema defaults are applied by the loader
            }

            field_type = field_info.annotation
            if typing.get_origin(field_type) is typing.Union:
                non_none_args = [arg for arg in typing.get_args(field_type) if arg is not type(None)]
                if len(non_none_args) == 1:
                    field_type = non_none_args[0]

            if field_type is int:
                kwargs["type"] = int
            elif field_type is float:
                kwargs["type"] = float

            group.add_argument(f"--{cli_arg.replace('_', '-')}", **kwargs)
        return parser

    @staticmethod
    def generate_cli_parser(
        schema: Type[ConfigSchema] = ConfigSchema,
        description: str = "Command line client for the AI.YOU API",
    ) -> ArgumentParser:
        """
        Generate an ArgumentParser from the configuration schema.

        Args:
            schema: The configuration schema class
            description: Parser description

        Returns:
            Parser with the schema arguments and logging flags
        """
        parser = ArgumentParser(
            prog="aiyou",
            description=description,
            epilog="""
Examples:
  aiyou assistants
  aiyou --assistant-id asst_123 chat "Hello"
  aiyou threads --page 1 --items-per-page 10
  aiyou transcribe meeting.mp3 --language fr
            """,
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Enable verbose logging (DEBUG level)",
        )
        parser.add_argument(
            "--quiet",
            action="store_true",
            help="Only log errors",
        )
        return ConfigLoader.add_schema_arguments(parser, schema)


def _load_from_dotenv_file(env_file: str) -> None:
    """Load values from the env file if it exists."""
    if os.path.exists(env_file):
        load_dotenv(env_file, override=False)
        logger.debug(f"Loaded configuration from {env_file}")
    else:
        logger.debug(f"{env_file} not found, skipping")
