import unittest

from util import error_codes
from util.errors import (
    EventError,
    ExternalServiceError,
    HandlerFailedError,
    InternalError,
    InvalidVariantError,
    MissingPayloadError,
    MissingTextError,
    ServiceError,
    TypeMismatchError,
    UnsupportedEventKindError,
)


class ServiceErrorTest(unittest.TestCase):

    def test_to_log_string_without_cause(self):
        error = ServiceError("Something went wrong", error_code = 42, emoji = "🫖")

        self.assertEqual(error.to_log_string(), "[🫖 E42] Something went wrong")

    def test_to_log_string_with_cause(self):
        try:
            try:
                raise ValueError("root cause")
            except ValueError as cause:
                raise ServiceError("Something went wrong", error_code = 42, emoji = "🫖") from cause
        except ServiceError as error:
            self.assertEqual(error.to_log_string(), "[🫖 E42] Something went wrong # Caused by: root cause")

    def test_str_equals_to_log_string(self):
        error = ServiceError("Something went wrong", error_code = 42, emoji = "🫖")

        self.assertEqual(str(error), error.to_log_string())

    def test_to_api_dict(self):
        error = ServiceError("Something went wrong", error_code = 42, emoji = "🫖")

        result = error.to_api_dict()

        self.assertEqual(result["error_code"], 42)
        self.assertEqual(result["emoji"], "🫖")
        self.assertIn("Something went wrong", result["message"])


class SubclassDefaultsTest(unittest.TestCase):

    def test_external_service_error(self):
        error = ExternalServiceError("msg", error_code = 1)

        self.assertEqual(error.http_status, 502)
        self.assertEqual(error.emoji, "🌐")

    def test_internal_error(self):
        error = InternalError("msg", error_code = 1)

        self.assertEqual(error.http_status, 500)


class EventErrorsTest(unittest.TestCase):

    def test_type_mismatch(self):
        error = TypeMismatchError(expected = "new|edited", actual = "callback")

        self.assertIsInstance(error, EventError)
        self.assertEqual(error.expected, "new|edited")
        self.assertEqual(error.actual, "callback")
        self.assertEqual(error.error_code, error_codes.EVENT_TYPE_MISMATCH)
        self.assertEqual(error.http_status, 422)
        self.assertIn("Expected a 'new|edited' event, got 'callback'", str(error))

    def test_codes_of_event_errors(self):
        self.assertEqual(MissingPayloadError("m").error_code, error_codes.EVENT_MISSING_PAYLOAD)
        self.assertEqual(MissingTextError("m").error_code, error_codes.EVENT_MISSING_TEXT)
        self.assertEqual(InvalidVariantError("m").error_code, error_codes.EVENT_INVALID_VARIANT)
        self.assertEqual(UnsupportedEventKindError("unknown").error_code, error_codes.EVENT_UNSUPPORTED_KIND)

    def test_unsupported_event_kind(self):
        error = UnsupportedEventKindError("unknown")

        self.assertIsInstance(error, EventError)
        self.assertEqual(error.kind, "unknown")
        self.assertIn("Unsupported event kind 'unknown'", str(error))

    def test_handler_failed(self):
        try:
            try:
                raise ValueError("boom")
            except ValueError as cause:
                raise HandlerFailedError("greeter", ["first"]) from cause
        except HandlerFailedError as error:
            self.assertIsInstance(error, InternalError)
            self.assertEqual(error.handler_name, "greeter")
            self.assertEqual(error.actions, ["first"])
            self.assertEqual(error.error_code, error_codes.HANDLER_FAILED)
            self.assertIn("Handler 'greeter' failed # Caused by: boom", str(error))
