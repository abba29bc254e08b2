from .client import create_client
from .user import USER_FIELD_COLUMNS, list_users, select_user_columns

__all__ = [
    "USER_FIELD_COLUMNS",
    "create_client",
    "list_users",
    "select_user_columns",
]
