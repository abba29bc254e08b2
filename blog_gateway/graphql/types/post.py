from typing import Any

import strawberry
from strawberry.types import Info

from blog_gateway.graphql.types.comment import Comment
from blog_gateway.graphql.utils import as_text


@strawberry.type
class Post:
    post_id: int | None = None
    user_id: int | None = None
    title: str | None = None
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @strawberry.field
    async def comments(self, info: Info) -> list[Comment | None] | None:
        """Comments of this post, batched with every other post in the response."""
        rows = await info.context.loaders.post_comments.load(self.post_id)
        return [Comment.from_row(row) for row in rows]

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Post":
        return cls(
            post_id=row.get("post_id"),
            user_id=row.get("user_id"),
            title=row.get("title"),
            description=row.get("description"),
            created_at=as_text(row.get("created_at")),
            updated_at=as_text(row.get("updated_at")),
        )
