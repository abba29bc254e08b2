"""Per-request key batching on top of strawberry's DataLoader.

Batch boundary
--------------
A batch opens with the first ``load`` issued after the previous batch was
dispatched. Opening it schedules the dispatch with ``loop.call_soon``, so
the batch closes on the next event-loop iteration: every ``load`` made by
the running task, and by the tasks already queued ahead of the dispatch
callback (e.g. sibling resolvers started by the same ``gather``), joins it.
``max_batch_size`` closes a batch early once it is full.

Caching is disabled: a repeated key is loaded again, and duplicate keys
inside one batch reach the bulk-fetch function as duplicates.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Generic, TypeVar

from strawberry.dataloader import DataLoader

from blog_gateway import telemetry
from blog_gateway.core.exceptions import BatchResultMismatchError

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

BatchFn = Callable[[list[K]], Awaitable[list[V]]]


class KeyBatcher(Generic[K, V]):
    """Coalesces ``load(key)`` calls into one ``batch_fn(keys)`` call.

    ``batch_fn`` must return one value per key, position for position. If it
    raises, or returns a misaligned list, every caller of that batch gets the
    same exception.
    """

    def __init__(
        self,
        batch_fn: BatchFn,
        *,
        name: str,
        max_batch_size: int | None = None,
    ):
        self.name = name
        self._batch_fn = batch_fn
        self._loader: DataLoader[K, V] = DataLoader(
            load_fn=self._dispatch,
            cache=False,
            max_batch_size=max_batch_size,
        )

    async def _dispatch(self, keys: list[K]) -> list[V]:
        telemetry.record_batch(self.name, len(keys))
        logger.debug(
            f"Dispatching '{self.name}' batch",
            extra={"props": {"loader": self.name, "keys": len(keys)}},
        )
        values = await self._batch_fn(keys)
        if len(values) != len(keys):
            raise BatchResultMismatchError(self.name, len(keys), len(values))
        return values

    def load(self, key: K) -> Awaitable[V]:
        return self._loader.load(key)

    def load_many(self, keys: Iterable[K]) -> Awaitable[list[V]]:
        return self._loader.load_many(keys)
