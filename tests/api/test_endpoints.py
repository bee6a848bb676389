#!/usr/bin/env python3
"""
Tests for the assistants, models, conversation and threads endpoints.
"""

import json
import sys
import unittest
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from helpers.mock_api import FakeAPI, json_response  # noqa: E402

from aiyou.constants import (  # noqa: E402
    MODELS_PATH,
    SAVE_CONVERSATION_PATH,
    THREADS_PATH,
    USER_ASSISTANTS_PATH,
    USER_THREADS_PATH,
)
from aiyou.errors import APIError, ResponseDecodeError, ValidationError  # noqa: E402
from aiyou.models import (  # noqa: E402
    ModelProperties,
    ModelRequest,
    SaveConversationRequest,
    ThreadFilter,
    UserThreadsParams,
)

THREADS = {
    "threads": [
        {"id": "t1", "content": "first", "assistantName": "Helper", "firstMessage": "Hi",
         "createdAt": "2024-05-01T10:00:00Z", "isNewAppThread": True},
        {"id": "t2", "content": "second", "assistantName": "Coder", "firstMessage": "Code?"},
    ],
    "totalItems": 2,
    "itemsPerPage": 10,
    "currentPage": 1,
}


class TestAssistants(unittest.TestCase):
    def test_get_user_assistants(self):
        api = FakeAPI().on("GET", USER_ASSISTANTS_PATH, json_response(200, {
            "members": [{"id": 1, "name": "Helper", "modelId": "m1", "isPublic": True}],
            "totalItems": 1,
        }))
        assistants = api.client().get_user_assistants()

        self.assertEqual(assistants.total_items, 1)
        self.assertEqual(assistants.members[0].name, "Helper")
        self.assertEqual(assistants.members[0].model_id, "m1")
        self.assertTrue(assistants.members[0].is_public)

    def test_malformed_body(self):
        api = FakeAPI().on("GET", USER_ASSISTANTS_PATH, httpx.Response(200, content=b"<html>"))
        with self.assertRaises(ResponseDecodeError):
            api.client().get_user_assistants()


class TestModels(unittest.TestCase):
    def test_get_models(self):
        api = FakeAPI().on("GET", MODELS_PATH, json_response(200, {
            "models": [{"id": "m1", "name": "Mistral", "properties": {"maxTokens": 4096, "provider": "x"}}],
            "total": 1,
        }))
        models = api.client().get_models()
        self.assertEqual(models.total, 1)
        self.assertEqual(models.models[0].properties.max_tokens, 4096)

    def test_create_model(self):
        api = FakeAPI().on("POST", MODELS_PATH, json_response(201, {"model": {"id": "m2", "name": "New"}}))
        request = ModelRequest(name="New", description="test", properties=ModelProperties(max_tokens=100))

        created = api.client().create_model(request)

        self.assertEqual(created.model.id, "m2")
        body = json.loads(api.last("POST", MODELS_PATH).content)
        self.assertEqual(body["name"], "New")
        self.assertEqual(body["properties"]["maxTokens"], 100)


class TestConversation(unittest.TestCase):
    def test_save_conversation_accepts_201(self):
        api = FakeAPI().on("POST", SAVE_CONVERSATION_PATH, json_response(201, {
            "id": "t9", "object": "thread", "createdAt": 1700000000,
        }))
        request = SaveConversationRequest(assistant_id="asst-1", conversation="[]", first_message="Hi")

        saved = api.client().save_conversation(request)

        self.assertEqual(saved.id, "t9")
        body = json.loads(api.last("POST", SAVE_CONVERSATION_PATH).content)
        self.assertEqual(body["assistantId"], "asst-1")
        self.assertEqual(body["firstMessage"], "Hi")

    def test_save_conversation_rejects_unexpected_success_status(self):
        api = FakeAPI().on("POST", SAVE_CONVERSATION_PATH, json_response(202, {"id": "t9"}))
        with self.assertRaises(APIError) as cm:
            api.client().save_conversation(SaveConversationRequest(assistant_id="a", conversation="c"))
        self.assertEqual(cm.exception.status_code, 202)

    def test_save_conversation_requires_fields(self):
        api = FakeAPI()
        client = api.client()
        with self.assertRaises(ValidationError):
            client.save_conversation(SaveConversationRequest(conversation="c"))
        with self.assertRaises(ValidationError):
            client.save_conversation(SaveConversationRequest(assistant_id="a"))
        self.assertEqual(api.requests, [])

    def test_get_conversation_finds_thread(self):
        api = FakeAPI().on("GET", USER_THREADS_PATH, json_response(200, THREADS))
        thread = api.client().get_conversation("t2")
        self.assertEqual(thread.assistant_name, "Coder")
        self.assertEqual(thread.first_message, "Code?")

    def test_get_conversation_not_found(self):
        api = FakeAPI().on("GET", USER_THREADS_PATH, json_response(200, THREADS))
        with self.assertRaises(APIError) as cm:
            api.client().get_conversation("missing")
        self.assertEqual(cm.exception.status_code, 404)
        self.assertIn("missing", cm.exception.message)


class TestThreads(unittest.TestCase):
    def test_get_user_threads_with_pagination(self):
        api = FakeAPI().on("GET", USER_THREADS_PATH, json_response(200, THREADS))
        params = UserThreadsParams(page=2, items_per_page=10, filter=ThreadFilter(search="hello"))

        output = api.client().get_user_threads(params)

        self.assertEqual(len(output.threads), 2)
        self.assertEqual(output.total_items, 2)
        self.assertTrue(output.threads[0].is_new_app_thread)
        query = api.last("GET", USER_THREADS_PATH).url.params
        self.assertEqual(query["page"], "2")
        self.assertEqual(query["itemsPerPage"], "10")
        self.assertEqual(query["search"], "hello")

    def test_get_user_threads_without_params(self):
        api = FakeAPI().on("GET", USER_THREADS_PATH, json_response(200, THREADS))
        api.client().get_user_threads()
        self.assertEqual(str(api.last("GET", USER_THREADS_PATH).url.query, "ascii"), "")

    def test_delete_thread_accepts_204(self):
        api = FakeAPI().on("DELETE", f"{THREADS_PATH}/t1", httpx.Response(204))
        api.client().delete_thread("t1")
        self.assertEqual(api.calls("DELETE", f"{THREADS_PATH}/t1"), 1)

    def test_delete_thread_rejects_other_success_status(self):
        api = FakeAPI().on("DELETE", f"{THREADS_PATH}/t1", json_response(202, {"message": "queued"}))
        with self.assertRaises(APIError) as cm:
            api.client().delete_thread("t1")
        self.assertEqual(cm.exception.message, "queued")

    def test_delete_thread_not_found(self):
        api = FakeAPI().on("DELETE", f"{THREADS_PATH}/nope", json_response(404, {"message": "not found"}))
        with self.assertRaises(APIError) as cm:
            api.client().delete_thread("nope")
        self.assertEqual(cm.exception.status_code, 404)

    def test_delete_thread_requires_id(self):
        with self.assertRaises(ValidationError):
            FakeAPI().client().delete_thread("")


if __name__ == "__main__":
    unittest.main()
