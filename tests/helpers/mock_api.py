#!/usr/bin/env python3
"""
In-memory fake of the AI.YOU API for tests.

Routes are keyed by (method, path). Each route holds a queue of canned
results; the last one sticks once the queue is drained. A result is an
httpx.Response, an exception to raise, or a callable taking the request.
"""

import json
from typing import Any, Callable, Dict, List, Tuple, Union

import httpx

from aiyou.api import Client
from aiyou.constants import LOGIN_PATH

BASE_URL = "https://api.test"

LOGIN_OK = {
    "token": "jwt-token-123",
    "expires_at": "2099-01-01T00:00:00Z",
    "user": {"id": 1, "email": "user@example.com"},
}

Result = Union[httpx.Response, BaseException, Callable[[httpx.Request], httpx.Response]]


def json_response(status: int, body: Any, headers: Dict[str, str] = None) -> httpx.Response:
    return httpx.Response(status, json=body, headers=headers)


def sse_response(*frames: str, status: int = 200) -> httpx.Response:
    """Build a text/event-stream response from raw frame lines."""
    content = "".join(frames).encode("utf-8")
    return httpx.Response(status, content=content, headers={"content-type": "text/event-stream"})


def sse_frame(payload: Any) -> str:
    if isinstance(payload, str):
        return f"data: {payload}\n\n"
    return f"data: {json.dumps(payload)}\n\n"


def delta_chunk(text: str, finish_reason: str = None) -> Dict[str, Any]:
    choice: Dict[str, Any] = {"index": 0, "delta": {"content": text}}
    if finish_reason:
        choice["finish_reason"] = finish_reason
    return {"id": "chatcmpl-1", "object": "chat.completion.chunk", "created": 1700000000,
            "model": "test-model", "choices": [choice]}


class FakeAPI:
    """Records requests and replays canned responses."""

    def __init__(self, login: bool = True):
        self.routes: Dict[Tuple[str, str], List[Result]] = {}
        self.requests: List[httpx.Request] = []
        if login:
            self.on("POST", LOGIN_PATH, json_response(200, LOGIN_OK))

    def on(self, method: str, path: str, *results: Result) -> "FakeAPI":
        self.routes[(method.upper(), path)] = list(results)
        return self

    def calls(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method.upper() and r.url.path == path)

    def last(self, method: str, path: str) -> httpx.Request:
        matching = [r for r in self.requests if r.method == method.upper() and r.url.path == path]
        return matching[-1]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return json_response(404, {"error": f"no route for {request.method} {request.url.path}"})

        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, BaseException):
            raise result
        if callable(result) and not isinstance(result, httpx.Response):
            return result(request)
        # Responses are single use; rebuild so a sticky result can be replayed
        return httpx.Response(result.status_code, headers=result.headers, content=result.content)

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def client(self, **kwargs) -> Client:
        options = {
            "email": "user@example.com",
            "password": "secret",
            "base_url": BASE_URL,
            "retry_delay": 0,
        }
        options.update(kwargs)
        return Client(http_client=self.http_client(), **options)
