"""
Chat completion endpoint.

Non-streaming completions transparently fall back to streaming when the
server reports that the assistant only answers in streaming mode: the
same request is re-issued with ``stream`` forced on and the fragments are
folded into one ChatCompletionResponse.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..constants import CHAT_COMPLETIONS_PATH, DEFAULT_TEMPERATURE, DEFAULT_TOP_P
from ..errors import APIError, ResponseDecodeError
from ..models.chat import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    Message,
    Usage,
)
from .context import Context
from .streaming import StreamReader
from .utils import extract_error_message, read_body

logger = logging.getLogger(__name__)


def requires_streaming(message: str) -> bool:
    """Check whether an API error message asks for a streaming request."""
    return "stream" in (message or "").lower()


def collect_stream(reader: StreamReader) -> ChatCompletionResponse:
    """
    Drain a stream and fold its fragments into one complete response.

    The reader is closed on every exit path. Deltas are grouped by choice
    index, and each choice's text is the concatenation of its non-empty
    deltas in arrival order. An empty stream yields one empty choice.
    """
    parts: Dict[int, List[str]] = {}
    roles: Dict[int, str] = {}
    finish_reasons: Dict[int, Optional[str]] = {}
    usage: Optional[Usage] = None
    first: Optional[ChatCompletionResponse] = None

    with reader:
        for chunk in reader:
            if first is None:
                first = chunk
            if chunk.usage is not None:
                usage = chunk.usage
            for choice in chunk.choices:
                parts.setdefault(choice.index, [])
                if choice.delta is not None and choice.delta.role:
                    roles[choice.index] = choice.delta.role
                elif choice.message is not None and choice.message.role:
                    roles[choice.index] = choice.message.role
                if choice.text:
                    parts[choice.index].append(choice.text)
                if choice.finish_reason:
                    finish_reasons[choice.index] = choice.finish_reason

    if not parts:
        parts[0] = []
    choices = [
        Choice(
            index=index,
            message=Message(role=roles.get(index, "assistant"), content="".join(parts[index])),
            finish_reason=finish_reasons.get(index),
        )
        for index in sorted(parts)
    ]
    return ChatCompletionResponse(
        id=first.id if first else "",
        object="chat.completion",
        created=first.created if first else 0,
        model=first.model if first else "",
        usage=usage,
        choices=choices,
    )


class ChatMixin:
    """Chat completion operations, mixed into Client."""

    def chat_completion(
        self, request: ChatCompletionRequest, ctx: Optional[Context] = None
    ) -> ChatCompletionResponse:
        """
        Send a chat completion request and return the full response.

        Raises:
            APIError: If the server rejects the request
            ResponseDecodeError: If the response body is malformed
        """
        if request.stream:
            return collect_stream(self.chat_completion_stream(request, ctx=ctx))

        logger.debug(f"Sending chat completion request for assistant {request.assistant_id}")
        try:
            response = self.authenticated_request(
                "POST", CHAT_COMPLETIONS_PATH, json=request.to_payload(), ctx=ctx
            )
        except APIError as e:
            if not requires_streaming(e.message):
                raise
            return self._chat_completion_via_stream(request, ctx, e.message)

        body = self._read_chat_body(response)
        error = body.get("error")
        if error:
            message = error.get("message", "") if isinstance(error, dict) else str(error)
            if requires_streaming(message):
                return self._chat_completion_via_stream(request, ctx, message)
            raise APIError(response.status_code, message or "unknown error")

        try:
            return ChatCompletionResponse.model_validate(body)
        except ValueError as e:
            raise ResponseDecodeError(f"failed to decode chat completion response: {e}") from e

    def chat_completion_stream(
        self, request: ChatCompletionRequest, ctx: Optional[Context] = None
    ) -> StreamReader:
        """
        Send a streaming chat completion request.

        The ``stream`` flag is forced on. The returned reader owns the
        response and must be closed by the caller.
        """
        stream_request = request.model_copy(update={"stream": True})
        response = self.authenticated_request(
            "POST", CHAT_COMPLETIONS_PATH, json=stream_request.to_payload(), ctx=ctx
        )
        if response.status_code != httpx.codes.OK:
            message = extract_error_message(response)
            response.close()
            raise APIError(response.status_code, message)
        return StreamReader.from_response(response)

    def create_chat_completion(
        self, messages: List[Message], assistant_id: str, ctx: Optional[Context] = None
    ) -> ChatCompletionResponse:
        """Chat completion with default sampling parameters."""
        request = ChatCompletionRequest(
            messages=messages,
            assistant_id=assistant_id,
            temperature=DEFAULT_TEMPERATURE,
            top_p=DEFAULT_TOP_P,
            prompt_system="",
            stream=False,
        )
        return self.chat_completion(request, ctx=ctx)

    def create_chat_completion_stream(
        self, messages: List[Message], assistant_id: str, ctx: Optional[Context] = None
    ) -> StreamReader:
        """Streaming chat completion with default sampling parameters."""
        request = ChatCompletionRequest(
            messages=messages,
            assistant_id=assistant_id,
            temperature=DEFAULT_TEMPERATURE,
            top_p=DEFAULT_TOP_P,
            prompt_system="",
            stream=True,
        )
        return self.chat_completion_stream(request, ctx=ctx)

    def _chat_completion_via_stream(
        self, request: ChatCompletionRequest, ctx: Optional[Context], reason: str
    ) -> ChatCompletionResponse:
        logger.info(f"Server requires streaming ({reason}), re-issuing request as a stream")
        stream_request = request.model_copy(update={"stream": True})
        return collect_stream(self.chat_completion_stream(stream_request, ctx=ctx))

    @staticmethod
    def _read_chat_body(response: httpx.Response) -> Any:
        try:
            raw = read_body(response)
        finally:
            response.close()
        try:
            body = json.loads(raw)
        except ValueError as e:
            raise ResponseDecodeError(f"failed to decode chat completion response: {e}") from e
        if not isinstance(body, dict):
            raise ResponseDecodeError("chat completion response is not a JSON object")
        return body
