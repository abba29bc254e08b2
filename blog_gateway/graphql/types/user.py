from typing import Any

import strawberry
from strawberry.types import Info

from blog_gateway.graphql.types.post import Post
from blog_gateway.graphql.utils import as_text


# --- Object Types ---
@strawberry.type
class User:
    """A blog author. Only the columns requested by the query are loaded."""

    id: int
    name: str | None = None
    email: str | None = None
    last_name: str | None = None
    birthday: str | None = None
    address: str | None = None
    email_verified_at: str | None = None
    password: str | None = None
    remember_token: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @strawberry.field
    async def posts(self, info: Info) -> list[Post | None] | None:
        """Posts written by this user, batched with every other user in the response."""
        rows = await info.context.loaders.user_posts.load(self.id)
        return [Post.from_row(row) for row in rows]

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        return cls(
            id=row["id"],
            name=row.get("name"),
            email=row.get("email"),
            last_name=row.get("last_name"),
            birthday=as_text(row.get("birthday")),
            address=row.get("address"),
            email_verified_at=as_text(row.get("email_verified_at")),
            password=row.get("password"),
            remember_token=row.get("remember_token"),
            created_at=as_text(row.get("created_at")),
            updated_at=as_text(row.get("updated_at")),
        )
