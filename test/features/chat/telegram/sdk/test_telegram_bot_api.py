import unittest

import requests
import requests_mock
from pydantic import SecretStr

from features.chat.telegram.sdk.telegram_bot_api import TelegramBotAPI
from util import error_codes
from util.errors import ExternalServiceError

BASE_URL = "https://telegram.local/bot123:abc"


class TelegramBotAPITest(unittest.TestCase):

    api: TelegramBotAPI

    def setUp(self):
        self.api = TelegramBotAPI(bot_token = SecretStr("123:abc"), api_base_url = "https://telegram.local", timeout_s = 2)

    @requests_mock.Mocker()
    def test_send_text_message(self, m):
        m.post(f"{BASE_URL}/sendMessage", json = {"ok": True, "result": {"message_id": 1}})

        result = self.api.send_text_message(42, "Hello")

        self.assertEqual(result["result"]["message_id"], 1)
        self.assertEqual(m.last_request.json(), {"chat_id": 42, "text": "Hello", "disable_notification": False})

    @requests_mock.Mocker()
    def test_send_markdown_message(self, m):
        m.post(f"{BASE_URL}/sendMessage", json = {"ok": True})

        self.api.send_markdown_message(42, "*bold*", disable_notification = True)

        payload = m.last_request.json()
        self.assertEqual(payload["parse_mode"], "MarkdownV2")
        self.assertEqual(payload["text"], "*bold*")
        self.assertTrue(payload["disable_notification"])

    @requests_mock.Mocker()
    def test_send_sticker(self, m):
        m.post(f"{BASE_URL}/sendSticker", json = {"ok": True})

        self.api.send_sticker("42", "sticker-id")

        self.assertEqual(m.last_request.json()["sticker"], "sticker-id")
        self.assertEqual(m.last_request.json()["chat_id"], "42")

    @requests_mock.Mocker()
    def test_error_status(self, m):
        m.post(f"{BASE_URL}/sendMessage", status_code = 400, json = {"ok": False, "description": "Bad Request: chat not found"})

        with self.assertRaises(ExternalServiceError) as context:
            self.api.send_text_message(42, "Hello")

        self.assertEqual(context.exception.error_code, error_codes.TELEGRAM_API_FAILED)
        self.assertIn("chat not found", str(context.exception))

    @requests_mock.Mocker()
    def test_error_status_without_json(self, m):
        m.post(f"{BASE_URL}/sendSticker", status_code = 502, text = "Bad Gateway", reason = "Bad Gateway")

        with self.assertRaises(ExternalServiceError) as context:
            self.api.send_sticker(42, "sticker-id")

        self.assertIn("HTTP_502", str(context.exception))

    @requests_mock.Mocker()
    def test_connection_failure(self, m):
        m.post(f"{BASE_URL}/sendMessage", exc = requests.exceptions.ConnectTimeout)

        with self.assertRaises(ExternalServiceError) as context:
            self.api.send_text_message(42, "Hello")

        self.assertEqual(context.exception.error_code, error_codes.TELEGRAM_API_NO_RESPONSE)
