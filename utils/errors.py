"""
utils/errors.py
---------------
Error hierarchy shared by every layer.

Services raise these; the HTTP layer maps each family to a status code:
    ValidationError    -> 400
    NotFoundError      -> 404
    ConfigurationError -> 500 (400 from POST /api/init)
    StorageError       -> 500
"""


class CalendarError(Exception):
    """Base exception for all calendar API errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(CalendarError):
    """A required field is missing or a value is outside its allowed set."""

    status_code = 400


class InvalidDateError(ValidationError):
    """A date value could not be parsed."""

    def __init__(self, message: str = "Invalid date format"):
        super().__init__(message)


class NotFoundError(CalendarError):
    """No row matched the requested id."""

    status_code = 404


class ConfigurationError(CalendarError):
    """No database connection string is available."""


class StorageError(CalendarError):
    """The database could not serve the request."""


class SchemaInitError(StorageError):
    """Schema initialization failed.

    Carries the translated message, the native or synthesized error code and
    a list of human-readable suggestions.
    """

    def __init__(self, message: str, code: str | None = None,
                 suggestions: list[str] | None = None, has_env_var: bool = False):
        super().__init__(message)
        self.code = code
        self.suggestions = suggestions or []
        self.has_env_var = has_env_var

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "code": self.code,
            "suggestions": self.suggestions,
            "hasEnvVar": self.has_env_var,
        }
