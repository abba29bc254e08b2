from blog_gateway.crud.base import chunked, select_children
from blog_gateway.crud.client import insert_client
from blog_gateway.crud.user import list_users

__all__ = [
    "chunked",
    "select_children",
    "insert_client",
    "list_users",
]
