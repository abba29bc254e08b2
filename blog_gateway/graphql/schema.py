import logging

import strawberry
from strawberry.schema.config import StrawberryConfig
from strawberry.types import Info

from .extensions import CustomErrorHandler, TransactionScope
from .resolvers import client as client_resolvers
from .resolvers import user as user_resolvers
from .types import Client, ClientInput, Comment, Post, User

logger = logging.getLogger(__name__)


@strawberry.type
class Query:
    @strawberry.field
    async def users(self, info: Info, first: int | None = None) -> list[User | None] | None:
        """First users ordered by id (10 unless 'first' says otherwise)."""
        return await user_resolvers.list_users(info=info, first=first)


@strawberry.type
class Mutation:
    @strawberry.mutation(name="createClient")
    async def create_client(self, info: Info, client: ClientInput) -> Client:
        """Inserts a client and returns it with its generated id."""
        return await client_resolvers.create_client(info=info, client=client)


# --- Schema Definition ---
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    types=[User, Post, Comment, Client],
    # Field names match the column names (last_name, created_at, ...)
    config=StrawberryConfig(auto_camel_case=False),
    extensions=[
        TransactionScope,
        CustomErrorHandler,
    ],
)
