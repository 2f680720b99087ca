"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
API failures are never raised; they are classified into outcomes.
These exceptions cover problems on the client side of the wire.
"""


class HassCliError(Exception):
    """Base exception for all hass-cli errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class InvalidJSONError(HassCliError):
    """Raised when a JSON option supplied on the command line cannot be parsed."""

    def __init__(self, message: str = "Invalid JSON", field: str = "data") -> None:
        self.field = field
        super().__init__(message, code="VAL_INVALID_JSON")


class ConfigurationError(HassCliError):
    """Raised when a bundled settings file is missing or invalid."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="CFG_INVALID")
