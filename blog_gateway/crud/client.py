from typing import Any

from sqlalchemy import insert

from blog_gateway.database import TransactionHandle
from blog_gateway.models import Client


async def insert_client(tx: TransactionHandle, *, values: dict[str, Any]) -> int:
    """Inserts one client row and returns its generated id."""
    table = Client.__table__
    stmt = insert(table).values(**values).returning(table.c.id)
    return await tx.fetch_value(stmt)
