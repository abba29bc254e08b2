import logging
from collections.abc import AsyncGenerator

from strawberry.fastapi import BaseContext

from blog_gateway.database import TransactionHandle, open_transaction
from blog_gateway.graphql.dataloaders import RelationLoaders, create_relation_loaders

logger = logging.getLogger(__name__)


# --- Custom Context ---
# Carries the request-scoped transaction and the loaders bound to it
class Context(BaseContext):
    def __init__(self, tx: TransactionHandle, loaders: RelationLoaders):
        super().__init__()
        self.tx = tx
        self.loaders = loaders

    @classmethod
    def for_transaction(cls, tx: TransactionHandle) -> "Context":
        return cls(tx=tx, loaders=create_relation_loaders(tx))


async def get_context() -> AsyncGenerator[Context, None]:
    """FastAPI dependency used as the GraphQL router's context getter.

    Commit/rollback is decided by the TransactionScope extension once the
    operation settles; closing here only releases the connection.
    """
    logger.debug("Creating GraphQL context")
    tx = await open_transaction()
    try:
        yield Context.for_transaction(tx)
    finally:
        await tx.close()
