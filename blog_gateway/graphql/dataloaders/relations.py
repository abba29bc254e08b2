import asyncio
import logging
import time
from collections.abc import Awaitable
from typing import Any

from blog_gateway import telemetry
from blog_gateway.crud.base import chunked, select_children
from blog_gateway.database import Base, TransactionHandle
from blog_gateway.graphql.dataloaders.batcher import KeyBatcher

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class ChildRowsLoader:
    """Loads the child rows of many parents with a bounded number of queries.

    Keyed by the parent id stored in ``parent_key`` on the child table. All
    queries run inside the request transaction the loader was built for, so
    an instance must never outlive (or be shared beyond) its request.
    """

    def __init__(
        self,
        tx: TransactionHandle,
        *,
        model: type[Base],
        parent_key: str,
        chunk_size: int,
        name: str,
    ):
        self._tx = tx
        self._model = model
        self._parent_key = parent_key
        self._chunk_size = chunk_size
        self.name = name
        self._batcher: KeyBatcher[int, list[Row]] = KeyBatcher(self.batch_load, name=name)

    def load(self, parent_id: int) -> Awaitable[list[Row]]:
        return self._batcher.load(parent_id)

    def load_many(self, parent_ids: list[int]) -> Awaitable[list[list[Row]]]:
        return self._batcher.load_many(parent_ids)

    async def batch_load(self, parent_ids: list[int]) -> list[list[Row]]:
        """Bulk-fetch function: one list of child rows per parent id, in input order."""
        if not parent_ids:
            return []

        started = time.perf_counter()
        rows_by_parent: dict[int, list[Row]] = {parent_id: [] for parent_id in parent_ids}
        # dict keys keep first-seen order; a key must not span two chunks
        distinct_ids = list(rows_by_parent)
        chunks = list(chunked(distinct_ids, self._chunk_size))
        telemetry.record_chunks(self.name, len(chunks))

        with telemetry.tracer.start_as_current_span(f"{self.name}.batch_load") as span:
            span.set_attribute("loader.keys", len(parent_ids))
            span.set_attribute("loader.chunks", len(chunks))
            try:
                chunk_results = await asyncio.gather(
                    *(
                        self._tx.fetch_all(
                            select_children(self._model, self._parent_key, chunk)
                        )
                        for chunk in chunks
                    )
                )
            except Exception:
                logger.error(
                    f"Bulk fetch failed for '{self.name}'",
                    exc_info=True,
                    extra={"props": {"loader": self.name, "keys": len(parent_ids)}},
                )
                raise

        for rows in chunk_results:
            for row in rows:
                rows_by_parent[row[self._parent_key]].append(row)

        elapsed = time.perf_counter() - started
        telemetry.record_bulk_fetch(self.name, elapsed)
        logger.debug(
            f"Loaded '{self.name}' batch",
            extra={
                "props": {
                    "loader": self.name,
                    "keys": len(parent_ids),
                    "distinct_keys": len(distinct_ids),
                    "chunks": len(chunks),
                    "rows": sum(len(rows) for rows in chunk_results),
                    "seconds": round(elapsed, 4),
                }
            },
        )
        return [rows_by_parent[parent_id] for parent_id in parent_ids]
