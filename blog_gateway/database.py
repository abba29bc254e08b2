import asyncio
import logging
from typing import Any

from sqlalchemy.engine import Result
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.expression import Executable

from blog_gateway.core.config import settings
from blog_gateway.core.exceptions import TransactionStateError

logger = logging.getLogger(__name__)

# The engine and its pool are process-wide; each request leases one
# connection through its own TransactionHandle.
async_engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


class TransactionHandle:
    """One request's database transaction.

    Every storage call made while serving the request goes through the
    handle. The handle is finished exactly once, by ``commit`` or
    ``rollback``; finishing twice or querying afterwards raises
    ``TransactionStateError``.

    A single connection cannot run two statements at the same time, so
    statements issued concurrently (e.g. the chunked queries of one batch)
    queue on an ``asyncio.Lock`` and run back to back.
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        statement_timeout: float | None = None,
    ):
        self._session = session
        self._lock = asyncio.Lock()
        self._statement_timeout = (
            settings.STATEMENT_TIMEOUT_SECONDS
            if statement_timeout is None
            else statement_timeout
        )
        self.outcome: str | None = None

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    def _ensure_open(self, action: str) -> None:
        if self.finished:
            raise TransactionStateError(
                f"Cannot {action}: transaction already {self.outcome}"
            )

    async def _execute(self, statement: Executable) -> Result:
        async with self._lock:
            self._ensure_open("execute")
            return await asyncio.wait_for(
                self._session.execute(statement), timeout=self._statement_timeout
            )

    async def fetch_all(self, statement: Executable) -> list[dict[str, Any]]:
        """Executes a statement and returns its rows as plain dicts keyed by column name."""
        result = await self._execute(statement)
        return [dict(row) for row in result.mappings().all()]

    async def fetch_value(self, statement: Executable) -> Any:
        """Executes a statement expected to produce exactly one scalar."""
        result = await self._execute(statement)
        return result.scalar_one()

    async def commit(self) -> None:
        await self._finish("commit", "committed")

    async def rollback(self) -> None:
        await self._finish("rollback", "rolled back")

    async def _finish(self, action: str, outcome: str) -> None:
        async with self._lock:
            self._ensure_open(action)
            try:
                await getattr(self._session, action)()
            except BaseException:
                # The server-side state is unknown; refuse any further finish
                self.outcome = "failed"
                raise
            self.outcome = outcome

    async def close(self) -> None:
        """Releases the session. An unfinished transaction is rolled back first."""
        try:
            if not self.finished:
                logger.warning("Closing a transaction that was never finished; rolling back")
                await self.rollback()
        finally:
            await self._session.close()


async def open_transaction() -> TransactionHandle:
    """Opens a session and begins its transaction by acquiring a connection."""
    session: AsyncSession = AsyncSessionLocal()
    try:
        # Acquiring the connection starts the session's transaction
        await session.connection()
    except Exception:
        logger.error("Failed to open database transaction", exc_info=True)
        await session.close()
        raise
    return TransactionHandle(session)
