"""Test cases for the AI chat endpoint."""

from unittest import mock

import requests

from .base import TestBase, completion_response

POST = "study_planner.services.chapter_service.requests.post"


class ChatAPITests(TestBase):

    def setUp(self):
        super().setUp()
        self.register()

    def test_chat_reply(self):
        reply = completion_response("Try spaced repetition.")
        with mock.patch(POST, return_value=reply) as post:
            response = self.client.post("/api/chat", json={"message": "How do I revise?"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {"response": "Try spaced repetition."})
        sent = post.call_args.kwargs["json"]["messages"][0]["content"]
        self.assertEqual(sent, "How do I revise?")

    def test_empty_message(self):
        with mock.patch(POST) as post:
            response = self.client.post("/api/chat", json={"message": ""})
        self.assertEqual(response.status_code, 400)
        post.assert_not_called()

    def test_upstream_error(self):
        with mock.patch(POST, return_value=completion_response("", status_code=500)):
            response = self.client.post("/api/chat", json={"message": "hi"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(), {"error": "Failed to process chat request"})

    def test_upstream_timeout(self):
        with mock.patch(POST, side_effect=requests.Timeout("slow")):
            response = self.client.post("/api/chat", json={"message": "hi"})
        self.assertEqual(response.status_code, 500)

    def test_missing_api_key(self):
        self.app.extensions["completion_client"].api_key = None
        response = self.client.post("/api/chat", json={"message": "hi"})
        self.assertEqual(response.status_code, 500)
