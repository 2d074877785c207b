"""Exception hierarchy for fuzzbox."""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable codes carried by construction-time option errors."""

    INVALID_COLLECTION = "invalid-collection"
    INVALID_FIELD_CONFIG = "invalid-field-config"
    INVALID_FIELD_WEIGHT = "invalid-field-weight"
    INVALID_KEYWORD = "invalid-keyword"
    INVALID_MAX_STRING_LENGTH = "invalid-max-string-length"


class FuzzboxError(Exception):
    """Base exception for all fuzzbox errors."""

    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Config Errors
class ConfigError(FuzzboxError):
    """Configuration errors."""

    user_message = "Configuration error"


class ConfigValidationError(ConfigError):
    """Configuration file validation failed."""

    user_message = "Invalid configuration"


class OptionsError(ConfigError):
    """Search engine options are invalid.

    Raised only while constructing an engine (or replacing its
    collection). The ``code`` attribute is stable and safe to branch on.
    """

    user_message = "Invalid search options"

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message=user_message)
        self.code = code


# Search Errors
class SearchError(FuzzboxError):
    """Search-related errors."""

    user_message = "Search error"
