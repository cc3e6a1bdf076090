"""API error classes.

Base error carrying an HTTP status and error code for the {"error": {...}}
envelope. Persistence errors propagate as StoreError; exception handlers in
main.py map both to responses.
"""


class APIError(Exception):
    """Base class for API errors.

    All API errors have a code, message, and HTTP status.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional list of additional error details.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: list[dict] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)

