import asyncio
from collections.abc import Callable
from typing import Any

import pytest
from sqlalchemy import Insert, Select
from sqlalchemy.dialects import postgresql

from blog_gateway.database import TransactionHandle
from blog_gateway.graphql.context import Context

# --- Fakes ---


class FakeResult:
    """Stands in for sqlalchemy.engine.Result."""

    def __init__(self, rows: list[dict[str, Any]] | None = None, scalar: Any = None):
        self._rows = rows or []
        self._scalar = scalar

    def mappings(self):
        return self

    def all(self) -> list[dict[str, Any]]:
        return list(self._rows)

    def scalar_one(self) -> Any:
        return self._scalar


class FakeSession:
    """Records statements and transaction calls made through a TransactionHandle."""

    def __init__(self, handler: Callable[[Any], Any] | None = None, delay: float = 0):
        self.handler = handler or (lambda statement: FakeResult())
        self.delay = delay
        self.statements: list[Any] = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False
        self.in_flight = 0
        self.max_in_flight = 0

    async def execute(self, statement):
        self.statements.append(statement)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            outcome = self.handler(statement)
        finally:
            self.in_flight -= 1
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1

    async def close(self):
        self.closed = True


def statement_params(statement) -> dict[str, Any]:
    return statement.compile(dialect=postgresql.dialect()).params


def in_values(statement) -> list[Any]:
    """Values bound to the single IN (...) clause of a children query."""
    return next(v for v in statement_params(statement).values() if isinstance(v, list))


def table_name(statement) -> str:
    if isinstance(statement, Insert):
        return statement.table.name
    return statement.get_final_froms()[0].name


def selected_column_names(statement) -> list[str]:
    return [column.name for column in statement.selected_columns]


class BlogStore:
    """Minimal in-memory blog database answering the gateway's statements."""

    def __init__(self):
        self.users: list[dict[str, Any]] = []
        self.posts: list[dict[str, Any]] = []
        self.comments: list[dict[str, Any]] = []
        self.clients: list[dict[str, Any]] = []
        self.failures: dict[str, Exception] = {}

    def __call__(self, statement):
        name = table_name(statement)
        if name in self.failures:
            return self.failures[name]
        if isinstance(statement, Insert):
            row = dict(statement_params(statement))
            row["id"] = len(self.clients) + 1
            self.clients.append(row)
            return FakeResult(scalar=row["id"])
        assert isinstance(statement, Select)
        if name == "users":
            limit = next(iter(statement_params(statement).values()))
            columns = selected_column_names(statement)
            rows = sorted(self.users, key=lambda user: user["id"])[:limit]
            return FakeResult([{column: row.get(column) for column in columns} for row in rows])
        parent_key = "user_id" if name == "posts" else "post_id"
        wanted = set(in_values(statement))
        source = self.posts if name == "posts" else self.comments
        return FakeResult([row for row in source if row[parent_key] in wanted])


# --- Fixtures ---


@pytest.fixture
def blog_store() -> BlogStore:
    store = BlogStore()
    store.users = [
        {"id": 1, "name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
        {"id": 2, "name": "Alan", "last_name": "Turing", "email": "alan@example.com"},
        {"id": 3, "name": "Grace", "last_name": "Hopper", "email": "grace@example.com"},
    ]
    store.posts = [
        {"post_id": 10, "user_id": 1, "title": "Notes", "description": "Engine"},
        {"post_id": 11, "user_id": 2, "title": "Computing", "description": "Machinery"},
        {"post_id": 12, "user_id": 1, "title": "Sketch", "description": "Analytical"},
    ]
    store.comments = [
        {"comment_id": 100, "post_id": 10, "user_id": 2, "description": "Brilliant"},
        {"comment_id": 101, "post_id": 12, "user_id": 3, "description": "Agreed"},
        {"comment_id": 102, "post_id": 10, "user_id": 3, "description": "Indeed"},
    ]
    return store


@pytest.fixture
def fake_session(blog_store) -> FakeSession:
    return FakeSession(blog_store)


@pytest.fixture
def tx(fake_session) -> TransactionHandle:
    return TransactionHandle(fake_session, statement_timeout=5)


@pytest.fixture
def graphql_context(tx) -> Context:
    return Context.for_transaction(tx)
