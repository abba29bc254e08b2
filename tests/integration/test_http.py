# Integration tests for the HTTP surface (FastAPI + strawberry router)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from blog_gateway.database import TransactionHandle
from blog_gateway.graphql.context import Context, get_context
from blog_gateway.main import app


@pytest_asyncio.fixture
async def test_client(fake_session):
    async def context_with_fake_session():
        tx = TransactionHandle(fake_session)
        try:
            yield Context.for_transaction(tx)
        finally:
            await tx.close()

    app.dependency_overrides[get_context] = context_with_fake_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_health(test_client: AsyncClient):
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_graphql_users_over_http(test_client: AsyncClient, fake_session):
    query = "{ users(first: 1) { id name posts { title } } }"

    response = await test_client.post("/graphql", json={"query": query})

    assert response.status_code == 200
    body = response.json()
    assert "errors" not in body
    assert body["data"] == {
        "users": [{"id": 1, "name": "Ada", "posts": [{"title": "Notes"}, {"title": "Sketch"}]}]
    }
    assert fake_session.commits == 1
    assert fake_session.rollbacks == 0


@pytest.mark.asyncio
async def test_graphql_error_over_http_rolls_back(test_client: AsyncClient, fake_session):
    response = await test_client.post("/graphql", json={"query": "{ users { nope } }"})

    assert response.json()["errors"]
    assert fake_session.commits == 0
    assert fake_session.rollbacks == 1
