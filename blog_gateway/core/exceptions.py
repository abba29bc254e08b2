"""
Core exceptions for the application.
"""


class APIException(Exception):
    """Base class for API exceptions."""
    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class ValidationError(APIException):
    """Raised when input data fails validation."""
    def __init__(self, message: str = "Validation error", errors: dict = None):
        self.errors = errors or {}
        super().__init__(message)


class TransactionStateError(APIException):
    """Raised when a transaction handle is used after it was committed or rolled back."""
    def __init__(self, message: str = "Transaction already finished"):
        super().__init__(message)


class BatchResultMismatchError(APIException):
    """Raised when a bulk-fetch function returns a result list not aligned with its keys."""
    def __init__(self, loader: str, expected: int, received: int):
        self.loader = loader
        self.expected = expected
        self.received = received
        super().__init__(
            f"Loader '{loader}' returned {received} results for {expected} keys"
        )
