from blog_gateway.core.config import Settings, settings
from blog_gateway.core.exceptions import (
    APIException,
    BatchResultMismatchError,
    TransactionStateError,
    ValidationError,
)

__all__ = [
    "Settings",
    "settings",
    "APIException",
    "BatchResultMismatchError",
    "TransactionStateError",
    "ValidationError",
]
