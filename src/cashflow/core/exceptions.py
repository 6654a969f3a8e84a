"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidArgumentError(AppError):
    """Raised for malformed pagination, inverted date ranges or unknown enum values."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_ARGUMENT")


class NotFoundError(AppError):
    """
    Raised when a requested resource is not visible to the caller.

    The message never distinguishes a missing id from one owned by another
    user or one that was soft-deleted.
    """

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class StoreUnavailableError(AppError):
    """Raised when the transaction store cannot serve a request."""

    def __init__(self, operation: str):
        super().__init__(
            f"Transaction store unavailable during {operation}",
            code="STORE_UNAVAILABLE",
        )


class ConcurrencyConflictError(AppError):
    """Raised when an update carries a version that no longer matches the stored row."""

    def __init__(self, identifier: str, expected: int, actual: int):
        super().__init__(
            f"Transaction {identifier} was modified concurrently: "
            f"expected version {expected}, found {actual}",
            code="CONFLICT",
        )
