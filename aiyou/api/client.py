"""
AI.YOU API client.

This module holds the Client class and the request pipeline shared by
every endpoint call:

    rate limit check -> [authenticate -> build request -> send -> classify status]

The bracketed steps run inside retry_operation, so network failures and
server-side 429 responses are retried with exponential backoff while
authentication and API errors surface immediately.
"""

import logging
import math
from typing import Any, Dict, Optional, Sequence

import httpx

from ..config.schema import ConfigSchema
from ..constants import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_RETRY_DELAY,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
)
from ..errors import APIError, NetworkError, RateLimitError, RequestCancelledError
from ..models.audio import DEFAULT_AUDIO_FORMATS, SupportedAudioFormat
from ..models.ratelimit import RateLimiterConfig
from ..utils.logging import log_rate_limit_event
from .assistants import AssistantsMixin
from .audio import AudioMixin
from .auth import Authenticator, BearerTokenAuthenticator, JWTAuthenticator
from .catalog import CatalogMixin
from .chat import ChatMixin
from .context import Context
from .conversation import ConversationMixin
from .ratelimit import RateLimiter
from .threads import ThreadsMixin
from .utils import extract_error_message, parse_retry_after, retry_operation

logger = logging.getLogger(__name__)


class Client(
    ChatMixin,
    AssistantsMixin,
    CatalogMixin,
    ConversationMixin,
    ThreadsMixin,
    AudioMixin,
):
    """
    Synchronous client for the AI.YOU API.

    Authenticates with email and password (JWT, renewed on expiry) unless a
    bearer token is given. May be shared between threads; the rate limiter
    and the authenticator serialize their own state.
    """

    def __init__(
        self,
        email: str = "",
        password: str = "",
        *,
        bearer_token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        rate_limiter: Optional[RateLimiterConfig] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        max_retry_delay: Optional[float] = DEFAULT_MAX_RETRY_DELAY,
        audio_formats: Sequence[SupportedAudioFormat] = DEFAULT_AUDIO_FORMATS,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the client.

        Args:
            email: Account email for JWT login
            password: Account password for JWT login
            bearer_token: Fixed token; when set, email and password are ignored
            base_url: API root URL
            timeout: Overall HTTP timeout in seconds
            rate_limiter: Token bucket settings; no client-side limiting if None
            max_retries: Retries after the first attempt of each request
            retry_delay: Initial backoff delay in seconds
            max_retry_delay: Ceiling on a single backoff delay (None for no cap)
            audio_formats: Formats accepted by transcribe_audio_file
            http_client: Preconfigured httpx client (the caller keeps ownership)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._max_retry_delay = max_retry_delay
        self.audio_formats = tuple(audio_formats)

        self._limiter = RateLimiter(rate_limiter) if rate_limiter is not None else None

        if bearer_token:
            self._auth: Authenticator = BearerTokenAuthenticator(bearer_token)
        else:
            self._auth = JWTAuthenticator(email, password, self._base_url, self._http)

        logger.debug(
            f"Client initialized for {self._base_url} "
            f"(auth={type(self._auth).__name__}, rate_limited={self._limiter is not None})"
        )

    @classmethod
    def from_config(cls, config: ConfigSchema, http_client: Optional[httpx.Client] = None) -> "Client":
        """Create a client from loaded configuration."""
        limiter = None
        if config.rate_limit is not None:
            limiter = RateLimiterConfig(
                requests_per_second=config.rate_limit,
                burst_size=config.burst_size,
            )
        return cls(
            email=config.email or "",
            password=config.password or "",
            bearer_token=config.bearer_token,
            base_url=config.base_url,
            timeout=config.timeout,
            rate_limiter=limiter,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
            max_retry_delay=config.max_retry_delay,
            http_client=http_client,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def authenticator(self) -> Authenticator:
        return self._auth

    @property
    def rate_limiter(self) -> Optional[RateLimiter]:
        return self._limiter

    def set_base_url(self, base_url: str) -> None:
        """Point the client, and its login requests, at another API root."""
        self._base_url = base_url.rstrip("/")
        if isinstance(self._auth, JWTAuthenticator):
            self._auth.set_base_url(self._base_url)

    def authenticated_request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, str]] = None,
        files: Any = None,
        data: Optional[Dict[str, str]] = None,
        ctx: Optional[Context] = None,
    ) -> httpx.Response:
        """
        Issue an authenticated API request.

        Args:
            method: HTTP method
            path: Endpoint path, appended to the base URL
            json: JSON body
            params: Query string parameters
            files: Multipart files (httpx format)
            data: Multipart or form fields
            ctx: Cancellation context

        Returns:
            The 2xx response with its body unread. The caller owns it and
            must close it.

        Raises:
            RateLimitError: Client-side if the limiter wait was cancelled;
                server-side if 429 persisted through all retries
            AuthenticationError: If no valid token could be obtained
            NetworkError: If the transport kept failing
            APIError: For any other non-2xx status
            RequestCancelledError: If the context ended during a backoff
        """
        ctx = ctx or Context.background()

        if self._limiter is not None:
            try:
                self._limiter.wait(ctx)
            except (RequestCancelledError, TimeoutError) as e:
                retry_after = math.ceil(self._limiter.get_wait_time())
                log_rate_limit_event(retry_after, True, path, logger=logger)
                raise RateLimitError(retry_after=retry_after, is_client_side=True) from e

        def attempt() -> httpx.Response:
            ctx.raise_if_cancelled()
            self._auth.authenticate(ctx)
            return self._send(method, path, json, params, files, data, ctx)

        return retry_operation(
            attempt,
            max_retries=self._max_retries,
            initial_delay=self._retry_delay,
            ctx=ctx,
            max_delay=self._max_retry_delay,
            operation_name=f"{method} {path}",
        )

    def _send(
        self,
        method: str,
        path: str,
        json: Any,
        params: Optional[Dict[str, str]],
        files: Any,
        data: Optional[Dict[str, str]],
        ctx: Context,
    ) -> httpx.Response:
        timeout = self._timeout
        remaining = ctx.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)

        request = self._http.build_request(
            method,
            f"{self._base_url}{path}",
            json=json,
            params=params,
            files=files,
            data=data,
            headers={"Authorization": f"Bearer {self._auth.token}"},
            timeout=timeout,
        )

        try:
            response = self._http.send(request, stream=True)
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise NetworkError(e, f"failed to send request: {e}") from e

        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            retry_after = parse_retry_after(response.headers)
            response.close()
            log_rate_limit_event(retry_after, False, path, logger=logger)
            raise RateLimitError(retry_after=retry_after, is_client_side=False)

        if not response.is_success:
            message = extract_error_message(response)
            response.close()
            raise APIError(response.status_code, message)

        return response

    def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
