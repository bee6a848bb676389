"""
Authentication module.

This module provides the two ways of obtaining the bearer credential
attached to every API request:
- JWTAuthenticator logs in with email and password and renews the token
  once it has expired
- BearerTokenAuthenticator holds a fixed token supplied by the caller
"""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..constants import LOGIN_PATH
from ..errors import AuthenticationError, NetworkError
from ..models.auth import LoginRequest, LoginResponse
from .context import Context

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Authenticator(ABC):
    """Capability shared by every credential holder."""

    @abstractmethod
    def authenticate(self, ctx: Optional[Context] = None) -> None:
        """Make sure a usable token is held. No-op while it is still valid.

        Raises:
            AuthenticationError: If no usable token can be obtained
        """

    @property
    @abstractmethod
    def token(self) -> str:
        """Current bearer value; may be empty before authentication."""


class JWTAuthenticator(Authenticator):
    """
    Email/password authenticator.

    The token and its expiry are replaced only by a successful login; a
    failed login leaves the previous state untouched, so the next call
    tries again instead of assuming validity. The lock guards the state
    only and is never held across the login request.
    """

    def __init__(
        self,
        email: str,
        password: str,
        base_url: str,
        http_client: httpx.Client,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._email = email
        self._password = password
        self._base_url = base_url.rstrip("/")
        self._http = http_client
        self._clock = clock
        self._token = ""
        self._expiry: Optional[datetime] = None
        self._lock = threading.Lock()

    @property
    def token(self) -> str:
        with self._lock:
            return self._token

    @property
    def expiry(self) -> Optional[datetime]:
        with self._lock:
            return self._expiry

    def set_base_url(self, base_url: str) -> None:
        self._base_url = base_url.rstrip("/")

    def token_expired(self) -> bool:
        """Check whether a login is needed."""
        with self._lock:
            if not self._token or self._expiry is None:
                return True
            return self._clock() >= self._expiry

    def authenticate(self, ctx: Optional[Context] = None) -> None:
        if not self.token_expired():
            return

        if not self._email or not self._password:
            raise AuthenticationError("email and password are required")

        if ctx is not None:
            ctx.raise_if_cancelled()

        login = self._login()

        expiry = login.expires_at
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)

        with self._lock:
            self._token = login.token
            self._expiry = expiry

        logger.debug(f"Authenticated, token valid until {expiry.isoformat()}")

    def _login(self) -> LoginResponse:
        payload = LoginRequest(email=self._email, password=self._password).to_payload()
        url = f"{self._base_url}{LOGIN_PATH}"
        logger.debug(f"Sending login request to {url}")

        try:
            response = self._http.post(url, json=payload)
        except httpx.TransportError as e:
            raise NetworkError(e, f"failed to send login request: {e}") from e

        try:
            if response.status_code != 200:
                raise AuthenticationError(
                    f"authentication failed with status code: {response.status_code}"
                )
            try:
                login = LoginResponse.model_validate_json(response.content)
            except PydanticValidationError as e:
                raise AuthenticationError(f"failed to decode login response: {e}") from e
        finally:
            response.close()

        if not login.token:
            raise AuthenticationError("login response did not contain a token")
        return login


class BearerTokenAuthenticator(Authenticator):
    """
    Fixed-token authenticator.

    The token is assumed valid for its whole lifetime. It may be replaced
    at any time with set_token(); the new value is used by the next request.
    """

    def __init__(self, token: str):
        self._token = token
        self._lock = threading.Lock()

    @property
    def token(self) -> str:
        with self._lock:
            return self._token

    def set_token(self, token: str) -> None:
        with self._lock:
            self._token = token

    def authenticate(self, ctx: Optional[Context] = None) -> None:
        if not self.token:
            raise AuthenticationError("bearer token is empty")
