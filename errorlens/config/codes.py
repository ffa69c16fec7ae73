"""
Default error codes produced by the built-in handlers.
"""


class DefaultErrorCodes:
    """Error code constants shared by handlers and configuration keys."""

    # General errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    MESSAGE_NOT_READABLE = "MESSAGE_NOT_READABLE"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    BAD_REQUEST = "BAD_REQUEST"
    JSON_PARSE_ERROR = "JSON_PARSE_ERROR"

    # Validation-specific codes
    REQUIRED_NOT_NULL = "REQUIRED_NOT_NULL"
    INVALID_SIZE = "INVALID_SIZE"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PATTERN = "REGEX_PATTERN_VALIDATION_FAILED"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    INVALID_URL = "INVALID_URL"
    INVALID_CREDIT_CARD = "INVALID_CREDIT_CARD"
