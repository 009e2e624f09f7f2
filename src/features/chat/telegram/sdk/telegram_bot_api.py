import requests
from pydantic import SecretStr
from requests import RequestException, Response

from util import log
from util.config import config
from util.error_codes import TELEGRAM_API_FAILED, TELEGRAM_API_NO_RESPONSE
from util.errors import ExternalServiceError


class TelegramBotAPI:
    """https://core.telegram.org/bots/api"""
    __bot_api_url: str
    __timeout_s: int

    def __init__(
        self,
        bot_token: SecretStr | None = None,
        api_base_url: str | None = None,
        timeout_s: int | None = None,
    ):
        token = (bot_token or config.telegram_bot_token).get_secret_value()
        self.__bot_api_url = f"{api_base_url or config.telegram_api_base_url}/bot{token}"
        self.__timeout_s = timeout_s or config.web_timeout_s

    def send_text_message(self, chat_id: int | str, text: str, disable_notification: bool = False) -> dict:
        log.t(f"Sending text message to chat #{chat_id}")
        payload = {
            "chat_id": chat_id,
            "text": text,
            "disable_notification": disable_notification,
        }
        return self.__post("sendMessage", payload)

    def send_markdown_message(self, chat_id: int | str, text: str, disable_notification: bool = False) -> dict:
        """Sends MarkdownV2 text, user input inside it must be escaped already."""
        log.t(f"Sending markdown message to chat #{chat_id}")
        payload = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": "MarkdownV2",
            "disable_notification": disable_notification,
        }
        return self.__post("sendMessage", payload)

    def send_sticker(self, chat_id: int | str, sticker_file_id: str, disable_notification: bool = False) -> dict:
        log.t(f"Sending sticker to chat #{chat_id}")
        payload = {
            "chat_id": chat_id,
            "sticker": sticker_file_id,
            "disable_notification": disable_notification,
        }
        return self.__post("sendSticker", payload)

    def __post(self, method: str, payload: dict) -> dict:
        url = f"{self.__bot_api_url}/{method}"
        try:
            response = requests.post(url, json = payload, timeout = self.__timeout_s)
        except RequestException as e:
            raise ExternalServiceError(f"Telegram API call '{method}' failed", TELEGRAM_API_NO_RESPONSE) from e
        self.__raise_for_status(method, response)
        return response.json()

    # noinspection PyMethodMayBeStatic
    def __raise_for_status(self, method: str, response: Response | None):
        if response is None:
            raise ExternalServiceError(f"No API response received for '{method}'", TELEGRAM_API_NO_RESPONSE)
        if response.status_code != 200:
            try:
                description = response.json().get("description", response.reason)
            except ValueError:
                description = response.reason
            log.w(f"  Status is not '200' for '{method}': HTTP_{response.status_code}!", description)
            raise ExternalServiceError(
                f"Telegram API call '{method}' failed with HTTP_{response.status_code}: {description}",
                TELEGRAM_API_FAILED,
            )
