# Event errors (1000-1999)
EVENT_TYPE_MISMATCH = 1001
EVENT_MISSING_PAYLOAD = 1002
EVENT_MISSING_TEXT = 1003
EVENT_INVALID_VARIANT = 1004
EVENT_UNSUPPORTED_KIND = 1005

# External service errors (5000-5999)
TELEGRAM_API_FAILED = 5001
TELEGRAM_API_NO_RESPONSE = 5002

# Internal errors (8000-8999)
HANDLER_FAILED = 8001
UNSUPPORTED_ACTION = 8002
