from .error_handler import CustomErrorHandler
from .transaction import TransactionScope, operation_errors

__all__ = [
    "CustomErrorHandler",
    "TransactionScope",
    "operation_errors",
]
