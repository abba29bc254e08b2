from collections.abc import Iterator, Sequence
from typing import TypeVar

from sqlalchemy import Select, select

from blog_gateway.database import Base

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yields consecutive slices of at most ``size`` items, in order."""
    if size < 1:
        raise ValueError("size must be positive")
    for start in range(0, len(items), size):
        yield items[start : start + size]


def select_children(model: type[Base], parent_key: str, parent_ids: Sequence[int]) -> Select:
    """SELECT * FROM <model table> WHERE <parent_key> IN (parent_ids)."""
    table = model.__table__
    return select(table).where(table.c[parent_key].in_(list(parent_ids)))
