"""
Configuration schema definition using Pydantic.

Each setting declares the environment variable and CLI argument it is
read from in ``json_schema_extra``; the loader and the CLI parser are both
driven by these declarations.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator

from ..constants import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_RETRY_DELAY,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
)
from ..utils.text import mask_sensitive_info


class ConfigSchema(BaseModel):
    """
    Declarative client configuration.

    Either email and password, or a bearer token, must be provided.
    """

    base_url: str = Field(
        DEFAULT_BASE_URL,
        description="AI.YOU API root URL",
        json_schema_extra={
            "env_var": "AIYOU_BASE_URL",
            "cli_arg": "base_url",
        }
    )

    email: Optional[str] = Field(
        None,
        description="Account email used to log in",
        json_schema_extra={
            "env_var": "AIYOU_EMAIL",
            "cli_arg": "email",
            "sensitive": True,
        }
    )

    password: Optional[str] = Field(
        None,
        description="Account password used to log in",
        json_schema_extra={
            "env_var": "AIYOU_PASSWORD",
            "cli_arg": "password",
            "sensitive": True,
        }
    )

    bearer_token: Optional[str] = Field(
        None,
        description="Fixed bearer token used instead of email/password login",
        json_schema_extra={
            "env_var": "AIYOU_BEARER_TOKEN",
            "cli_arg": "bearer_token",
            "sensitive": True,
        }
    )

    timeout: float = Field(
        DEFAULT_TIMEOUT,
        gt=0,
        description="HTTP timeout in seconds",
        json_schema_extra={
            "env_var": "AIYOU_TIMEOUT",
            "cli_arg": "timeout",
        }
    )

    max_retries: int = Field(
        DEFAULT_MAX_RETRIES,
        ge=0,
        description="Retries after the first attempt for network errors and 429 responses",
        json_schema_extra={
            "env_var": "AIYOU_MAX_RETRIES",
            "cli_arg": "max_retries",
        }
    )

    retry_delay: float = Field(
        DEFAULT_RETRY_DELAY,
        ge=0,
        description="Initial backoff delay in seconds, doubled after each retry",
        json_schema_extra={
            "env_var": "AIYOU_RETRY_DELAY",
            "cli_arg": "retry_delay",
        }
    )

    max_retry_delay: Optional[float] = Field(
        DEFAULT_MAX_RETRY_DELAY,
        gt=0,
        description="Ceiling on a single backoff delay in seconds",
        json_schema_extra={
            "env_var": "AIYOU_MAX_RETRY_DELAY",
            "cli_arg": "max_retry_delay",
        }
    )

    rate_limit: Optional[float] = Field(
        None,
        gt=0,
        description="Client-side limit in requests per second (unlimited if unset)",
        json_schema_extra={
            "env_var": "AIYOU_RATE_LIMIT",
            "cli_arg": "rate_limit",
        }
    )

    burst_size: int = Field(
        1,
        ge=1,
        description="Requests allowed back-to-back by the rate limiter",
        json_schema_extra={
            "env_var": "AIYOU_BURST_SIZE",
            "cli_arg": "burst_size",
        }
    )

    assistant_id: Optional[str] = Field(
        None,
        description="Default assistant used by the chat command",
        json_schema_extra={
            "env_var": "AIYOU_ASSISTANT_ID",
            "cli_arg": "assistant_id",
        }
    )

    @model_validator(mode="after")
    def check_credentials(self) -> "ConfigSchema":
        """Require one complete way of authenticating."""
        if self.bearer_token:
            return self
        if not self.email or not self.password:
            raise ValueError(
                "either AIYOU_EMAIL and AIYOU_PASSWORD or AIYOU_BEARER_TOKEN must be set"
            )
        return self

    def masked(self) -> Dict[str, Any]:
        """Return the settings as a dict safe to log."""
        result: Dict[str, Any] = {}
        for field_name, field_info in type(self).model_fields.items():
            value = getattr(self, field_name)
            extra = field_info.json_schema_extra or {}
            if extra.get("sensitive") and value:
                result[field_name] = "***"
            elif isinstance(value, str):
                result[field_name] = mask_sensitive_info(value)
            else:
                result[field_name] = value
        return result

    model_config = {
        "validate_assignment": True,
        "extra": "forbid"
    }
