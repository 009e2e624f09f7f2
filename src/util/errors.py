from typing import Any

from util import error_codes


class ServiceError(Exception):
    error_code: int
    http_status: int
    emoji: str

    def __init__(
        self,
        message: str,
        error_code: int,
        http_status: int = 500,
        emoji: str = "⚠️",
    ):
        super().__init__(message)
        self.error_code = error_code
        self.http_status = http_status
        self.emoji = emoji

    def __str__(self) -> str:
        return self.to_log_string()

    def to_log_string(self) -> str:
        cause_str = f" # Caused by: {self.__cause__}" if self.__cause__ else ""
        return f"[{self.emoji} E{self.error_code}] {super().__str__()}{cause_str}"

    def to_api_dict(self) -> dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": str(self),
            "emoji": self.emoji,
        }


class ExternalServiceError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "🌐"):
        super().__init__(message, error_code, http_status = 502, emoji = emoji)


class InternalError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "⚠️"):
        super().__init__(message, error_code, http_status = 500, emoji = emoji)


class EventError(ServiceError):
    """Base for failures while reading a classified event."""

    def __init__(self, message: str, error_code: int, emoji: str = "📭"):
        super().__init__(message, error_code, http_status = 422, emoji = emoji)


class TypeMismatchError(EventError):
    expected: str
    actual: str

    def __init__(self, expected: str, actual: str):
        super().__init__(f"Expected a '{expected}' event, got '{actual}'", error_codes.EVENT_TYPE_MISMATCH)
        self.expected = expected
        self.actual = actual


class MissingPayloadError(EventError):
    def __init__(self, message: str):
        super().__init__(message, error_codes.EVENT_MISSING_PAYLOAD)


class MissingTextError(EventError):
    def __init__(self, message: str):
        super().__init__(message, error_codes.EVENT_MISSING_TEXT)


class InvalidVariantError(EventError):
    def __init__(self, message: str):
        super().__init__(message, error_codes.EVENT_INVALID_VARIANT)


class UnsupportedEventKindError(EventError):
    kind: str

    def __init__(self, kind: str):
        super().__init__(f"Unsupported event kind '{kind}'", error_codes.EVENT_UNSUPPORTED_KIND, emoji = "🤷")
        self.kind = kind


class HandlerFailedError(InternalError):
    handler_name: str
    actions: list

    def __init__(self, handler_name: str, actions: list):
        super().__init__(f"Handler '{handler_name}' failed", error_codes.HANDLER_FAILED)
        self.handler_name = handler_name
        self.actions = actions
