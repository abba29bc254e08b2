import logging
from collections.abc import Iterable

from strawberry.types import Info

from blog_gateway import crud
from blog_gateway.core.config import settings
from blog_gateway.core.exceptions import ValidationError
from blog_gateway.graphql.types.user import User
from blog_gateway.graphql.utils import requested_fields

logger = logging.getLogger(__name__)

PRIMARY_KEY = "id"

# GraphQL field -> users column. Fields outside this map (e.g. `posts`)
# are never sent to the database.
USER_FIELD_COLUMNS = {
    "id": "id",
    "name": "name",
    "last_name": "last_name",
    "email": "email",
    "birthday": "birthday",
    "address": "address",
    "email_verified_at": "email_verified_at",
    "password": "password",
    "remember_token": "remember_token",
    "created_at": "created_at",
    "updated_at": "updated_at",
}


def select_user_columns(fields: Iterable[str]) -> list[str]:
    """Allowlisted columns for the requested fields, primary key first.

    The primary key is always selected: relation fields are resolved by it.
    """
    columns = [PRIMARY_KEY]
    for field in fields:
        column = USER_FIELD_COLUMNS.get(field)
        if column is not None and column not in columns:
            columns.append(column)
    return columns


async def list_users(info: Info, first: int | None = None) -> list[User]:
    """Resolver for the 'users' query."""
    if first is not None and first < 0:
        raise ValidationError("'first' must not be negative")
    limit = first or settings.USERS_DEFAULT_LIMIT
    columns = select_user_columns(requested_fields(info))

    log_props = {"limit": limit, "columns": ",".join(columns)}
    logger.info("Executing 'users' query", extra={"props": log_props})
    rows = await crud.list_users(info.context.tx, columns=columns, limit=limit)
    logger.debug(f"Fetched {len(rows)} users", extra={"props": log_props})
    return [User.from_row(row) for row in rows]
