"""Request-scoped relation loaders.

Every GraphQL request gets its own loaders bound to its own transaction, so
no batching state crosses request boundaries.
"""

from dataclasses import dataclass

from blog_gateway.core.config import settings
from blog_gateway.database import TransactionHandle
from blog_gateway.graphql.dataloaders.batcher import KeyBatcher
from blog_gateway.graphql.dataloaders.relations import ChildRowsLoader
from blog_gateway.models import Comment, Post


@dataclass
class RelationLoaders:
    """Loaders for one request.

    Usage in a resolver:
        rows = await info.context.loaders.user_posts.load(user_id)
    """

    user_posts: ChildRowsLoader
    post_comments: ChildRowsLoader


def create_relation_loaders(tx: TransactionHandle) -> RelationLoaders:
    return RelationLoaders(
        user_posts=ChildRowsLoader(
            tx,
            model=Post,
            parent_key="user_id",
            chunk_size=settings.POSTS_CHUNK_SIZE,
            name="user_posts",
        ),
        post_comments=ChildRowsLoader(
            tx,
            model=Comment,
            parent_key="post_id",
            chunk_size=settings.COMMENTS_CHUNK_SIZE,
            name="post_comments",
        ),
    )


__all__ = [
    "ChildRowsLoader",
    "KeyBatcher",
    "RelationLoaders",
    "create_relation_loaders",
]
