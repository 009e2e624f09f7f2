import unittest
from unittest.mock import Mock

from features.chat.telegram.model.callback_query import CallbackQuery
from features.chat.telegram.model.chat import Chat
from features.chat.telegram.model.message import Message
from features.chat.telegram.model.user import User
from features.chat.telegram.sdk.telegram_bot_api import TelegramBotAPI
from features.dispatch.action import Action
from features.dispatch.action_interpreter import ActionInterpreter
from features.dispatch.event import Event
from features.dispatch.message_event import EventKind, MessageEvent
from util.errors import MissingPayloadError


class ActionInterpreterTest(unittest.IsolatedAsyncioTestCase):

    api: TelegramBotAPI
    event: Event
    interpreter: ActionInterpreter

    def setUp(self):
        self.api = Mock(spec = TelegramBotAPI)
        self.api.send_text_message.return_value = {"ok": True}
        message = Message(message_id = 1, chat = Chat(id = 42), text = "hi")
        self.event = Event(self.api, MessageEvent(kind = EventKind.new, payload = message), Mock())
        self.interpreter = ActionInterpreter()

    async def test_reply_text(self):
        result = await self.interpreter.perform(self.event, Action.reply_text("Hello"))

        self.assertEqual(result, {"ok": True})
        self.api.send_text_message.assert_called_once_with(42, "Hello")

    async def test_reply_markdown(self):
        await self.interpreter.perform(self.event, Action.reply_markdown("*Hello*"))

        self.api.send_markdown_message.assert_called_once_with(42, "*Hello*")

    async def test_reply_sticker(self):
        await self.interpreter.perform(self.event, Action.reply_sticker("sticker-id"))

        self.api.send_sticker.assert_called_once_with(42, "sticker-id")

    async def test_control_actions_do_nothing(self):
        self.assertIsNone(await self.interpreter.perform(self.event, Action.next()))
        self.assertIsNone(await self.interpreter.perform(self.event, Action.done()))

        self.api.send_text_message.assert_not_called()
        self.api.send_markdown_message.assert_not_called()
        self.api.send_sticker.assert_not_called()

    async def test_reply_to_callback_goes_to_its_chat(self):
        message = Message(message_id = 2, chat = Chat(id = 99), text = "pick one")
        callback = CallbackQuery(id = "cb", from_user = User(id = 7, first_name = "Ana"), message = message, data = "a")
        event = Event(self.api, MessageEvent(kind = EventKind.callback, payload = callback), Mock())

        await self.interpreter.perform(event, Action.reply_text("Picked"))

        self.api.send_text_message.assert_called_once_with(99, "Picked")

    async def test_reply_without_chat(self):
        callback = CallbackQuery(id = "cb", from_user = User(id = 7, first_name = "Ana"), data = "a")
        event = Event(self.api, MessageEvent(kind = EventKind.callback, payload = callback), Mock())

        with self.assertRaises(MissingPayloadError):
            await self.interpreter.perform(event, Action.reply_text("Picked"))
        self.api.send_text_message.assert_not_called()
