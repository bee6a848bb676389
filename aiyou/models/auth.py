#!/usr/bin/env python3
"""
Authentication Models

Payloads exchanged with the login endpoint.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from .base import ApiModel


class User(ApiModel):
    """A user of the AI.YOU platform."""

    id: Union[int, str]
    email: str = ""
    profile_image: Optional[str] = Field(None, alias="profileImage")
    first_name: Optional[str] = Field(None, alias="firstName")


class LoginRequest(ApiModel):
    """Body of ``POST /api/login``."""

    email: str
    password: str


class LoginResponse(ApiModel):
    """Body returned by a successful login."""

    token: str
    expires_at: datetime
    user: Optional[User] = None
