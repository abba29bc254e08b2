from collections.abc import Sequence
from typing import Any

from sqlalchemy import select

from blog_gateway.database import TransactionHandle
from blog_gateway.models import User


async def list_users(
    tx: TransactionHandle, *, columns: Sequence[str], limit: int
) -> list[dict[str, Any]]:
    """Returns the first ``limit`` users ordered by id, selecting only ``columns``."""
    table = User.__table__
    stmt = (
        select(*(table.c[name] for name in columns))
        .order_by(table.c.id.asc())
        .limit(limit)
    )
    return await tx.fetch_all(stmt)
