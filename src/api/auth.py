from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader
from starlette.status import HTTP_403_FORBIDDEN

from util.config import config

telegram_auth_key_header = APIKeyHeader(name = "X-Telegram-Bot-Api-Secret-Token", auto_error = False)


def verify_telegram_auth_key(auth_key: str | None = Security(telegram_auth_key_header)) -> str | None:
    if config.telegram_must_auth and auth_key != config.telegram_auth_key.get_secret_value():
        raise HTTPException(status_code = HTTP_403_FORBIDDEN, detail = "Could not validate the Telegram auth token")
    return auth_key
