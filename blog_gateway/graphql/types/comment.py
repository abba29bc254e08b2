from typing import Any

import strawberry

from blog_gateway.graphql.utils import as_text


@strawberry.type
class Comment:
    comment_id: int | None = None
    description: str | None = None
    post_id: int | None = None
    user_id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Comment":
        return cls(
            comment_id=row.get("comment_id"),
            description=row.get("description"),
            post_id=row.get("post_id"),
            user_id=row.get("user_id"),
            created_at=as_text(row.get("created_at")),
            updated_at=as_text(row.get("updated_at")),
        )
