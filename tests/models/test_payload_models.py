#!/usr/bin/env python3
"""
Tests for wire payload models and error classification records.
"""

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from aiyou.errors import APIError, RateLimitError  # noqa: E402
from aiyou.models import (  # noqa: E402
    AssistantsResponse,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ErrorClassification,
    ErrorKind,
    LoginResponse,
    Message,
    UserThreadsParams,
)


class TestChatModels(unittest.TestCase):
    def test_plain_string_content_becomes_text_part(self):
        message = Message(role="user", content="hello")
        self.assertEqual(message.content[0].type, "text")
        self.assertEqual(message.text, "hello")

    def test_null_content(self):
        self.assertEqual(Message.model_validate({"role": "assistant", "content": None}).text, "")

    def test_request_payload_uses_wire_names(self):
        payload = ChatCompletionRequest(messages=[Message(role="user", content="x")], assistant_id="a").to_payload()
        self.assertEqual(
            sorted(payload),
            ["assistantId", "messages", "promptSystem", "stream", "temperature", "top_p"],
        )

    def test_response_ignores_unknown_fields(self):
        response = ChatCompletionResponse.model_validate({
            "id": "1", "unknown": True,
            "choices": [{"delta": {"content": "x"}, "extra": 1}],
        })
        self.assertEqual(response.text, "x")

    def test_text_of_empty_response(self):
        self.assertEqual(ChatCompletionResponse().text, "")


class TestOtherModels(unittest.TestCase):
    def test_login_response_expiry(self):
        login = LoginResponse.model_validate({"token": "t", "expires_at": "2099-01-01T00:00:00Z"})
        self.assertEqual(login.expires_at, datetime(2099, 1, 1, tzinfo=timezone.utc))

    def test_assistants_accepts_alternate_keys(self):
        response = AssistantsResponse.model_validate({"assistants": [{"id": "a"}], "total": 1})
        self.assertEqual(len(response.members), 1)
        self.assertEqual(response.total_items, 1)

    def test_thread_params_skip_unset(self):
        self.assertEqual(UserThreadsParams().to_query(), {})
        self.assertEqual(UserThreadsParams(page=3).to_query(), {"page": "3"})


class TestErrorClassification(unittest.TestCase):
    def test_for_kind(self):
        self.assertTrue(ErrorClassification.for_kind(ErrorKind.NETWORK).should_retry)
        self.assertFalse(ErrorClassification.for_kind(ErrorKind.API).should_retry)

    def test_negative_retry_after_rejected(self):
        with self.assertRaises(ValueError):
            ErrorClassification(kind=ErrorKind.RATE_LIMIT, retry_after=-1, should_retry=True)

    def test_to_dict(self):
        data = ErrorClassification.for_kind(ErrorKind.RATE_LIMIT, 30).to_dict()
        self.assertEqual(data, {"kind": "rate_limit", "retry_after": 30, "should_retry": True})

    def test_error_messages(self):
        self.assertEqual(str(APIError(500, "boom")), "API error: 500 - boom")
        self.assertEqual(
            str(RateLimitError(retry_after=5, is_client_side=True)),
            "client-side rate limit exceeded. Retry after 5 seconds",
        )


if __name__ == "__main__":
    unittest.main()
