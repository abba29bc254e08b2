from .client import Client, ClientInput
from .comment import Comment
from .post import Post
from .user import User

__all__ = [
    "Client",
    "ClientInput",
    "Comment",
    "Post",
    "User",
]
