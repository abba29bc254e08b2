"""Export database models for use throughout the application."""

from blog_gateway.models.client import Client
from blog_gateway.models.comment import Comment
from blog_gateway.models.post import Post
from blog_gateway.models.user import User

__all__ = [
    "User",
    "Post",
    "Comment",
    "Client",
]
