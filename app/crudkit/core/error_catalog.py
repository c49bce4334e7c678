from dataclasses import dataclass
from fastapi import status


@dataclass(frozen=True)
class ErrorDefinition:
    code: str
    message: str
    status_code: int


class ErrorCatalog:
    VALIDATION_ERROR = ErrorDefinition(
        "VALIDATION_ERROR",
        "Validation error",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    INVALID_VALID_VALUES = ErrorDefinition(
        "INVALID_VALID_VALUES",
        "At least one valid value is required",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    INVALID_CAST_TYPE = ErrorDefinition(
        "INVALID_CAST_TYPE",
        "Unsupported cast type",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    QUERY_STRING_MISMATCH = ErrorDefinition(
        "QUERY_STRING_MISMATCH",
        "Query string keys and values differ in length",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    INTERNAL_ERROR = ErrorDefinition(
        "INTERNAL_ERROR",
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class AppError(Exception):
    def __init__(self, error: ErrorDefinition, details: object | None = None):
        self.error = error
        self.details = details
        super().__init__(error.message)


class RedirectRequired(Exception):
    """Raised to stop processing and send the client to ``url``."""

    def __init__(self, url: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(url)


class PrintableError(Exception):
    """An error whose message is an HTML fragment meant to be shown to the user.

    The message may be rewritten after the error is built, for example to drop
    or reorder the items of a validation list before it is displayed.
    """

    def __init__(self, message: str = "", status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def get_message(self) -> str:
        return self.message

    def set_message(self, message: str) -> None:
        self.message = message
        self.args = (message,)

    def prepare(self) -> str:
        return self.message
