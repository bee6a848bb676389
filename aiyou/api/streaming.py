"""
Streaming response reader.

Turns a ``text/event-stream`` body made of ``data: {JSON}`` frames into a
lazy sequence of ChatCompletionResponse fragments.

Stream contract:
- blank lines are skipped
- ``[DONE]``, bare or framed as ``data: [DONE]``, ends the stream and
  yields no fragment
- lines without the ``data:`` prefix (comments, keepalives, ``event:``
  fields) are skipped
- end of input without a sentinel also ends the stream
- a frame whose payload is not valid JSON raises StreamDecodeError; the
  reader is then only good for close()
- a transport failure mid-stream raises NetworkError and ends the stream
"""

import logging
from typing import Callable, Iterable, Iterator, Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..errors import NetworkError, StreamDecodeError
from ..models.chat import ChatCompletionResponse

logger = logging.getLogger(__name__)


class StreamReader:
    """
    Single-pass reader over streamed chat completion fragments.

    Not safe for use by more than one consumer. The caller owns the reader
    and must close it; using it as a context manager does that.
    """

    def __init__(
        self,
        lines: Iterable[Union[str, bytes]],
        close: Optional[Callable[[], None]] = None,
    ):
        self._lines: Iterator[Union[str, bytes]] = iter(lines)
        self._close = close
        self._closed = False
        self._finished = False

    @classmethod
    def from_response(cls, response: httpx.Response) -> "StreamReader":
        """Wrap an unconsumed streaming response."""
        return cls(response.iter_lines(), close=response.close)

    @property
    def closed(self) -> bool:
        return self._closed

    def read_chunk(self) -> Optional[ChatCompletionResponse]:
        """
        Read the next fragment.

        Returns:
            The next parsed fragment, or None at end of stream

        Raises:
            StreamDecodeError: If a data frame holds malformed JSON
            NetworkError: If the connection fails mid-stream
        """
        if self._finished or self._closed:
            return None

        while True:
            line = self._next_line()
            if line is None:
                break
            if not line:
                continue

            if line == SSE_DONE_SENTINEL:
                break

            if not line.startswith(SSE_DATA_PREFIX):
                logger.debug(f"Skipping non-data stream line: {line[:80]}")
                continue

            payload = line[len(SSE_DATA_PREFIX):].strip()
            if payload == SSE_DONE_SENTINEL:
                break

            try:
                return ChatCompletionResponse.model_validate_json(payload)
            except PydanticValidationError as e:
                self._finished = True
                raise StreamDecodeError(payload, e) from e

        self._finished = True
        return None

    def _next_line(self) -> Optional[str]:
        try:
            raw = next(self._lines)
        except StopIteration:
            return None
        except httpx.TransportError as e:
            self._finished = True
            raise NetworkError(e, f"stream interrupted: {e}") from e
        line = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        return line.strip()

    def close(self) -> None:
        """Release the underlying response. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._finished = True
        if self._close is not None:
            self._close()

    def __iter__(self) -> "StreamReader":
        return self

    def __next__(self) -> ChatCompletionResponse:
        chunk = self.read_chunk()
        if chunk is None:
            raise StopIteration
        return chunk

    def __enter__(self) -> "StreamReader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
