import asyncio

import pytest
from sqlalchemy.exc import OperationalError

from blog_gateway.database import TransactionHandle
from blog_gateway.graphql.dataloaders import ChildRowsLoader, create_relation_loaders
from blog_gateway.models import Comment, Post

from conftest import FakeResult, FakeSession, in_values, table_name


def posts_loader(tx, chunk_size=50_000):
    return ChildRowsLoader(
        tx, model=Post, parent_key="user_id", chunk_size=chunk_size, name="user_posts"
    )


@pytest.mark.asyncio
async def test_rows_are_grouped_by_parent_in_input_order(tx):
    loader = posts_loader(tx)

    result = await loader.batch_load([2, 1, 3])

    assert [[post["post_id"] for post in posts] for posts in result] == [[11], [10, 12], []]


@pytest.mark.asyncio
async def test_parent_without_children_gets_empty_list(tx):
    result = await posts_loader(tx).batch_load([3, 99])

    assert result == [[], []]


@pytest.mark.asyncio
async def test_duplicate_keys_each_get_a_result(tx, fake_session):
    result = await posts_loader(tx).batch_load([1, 2, 1])

    assert len(result) == 3
    assert result[0] == result[2]
    assert [post["post_id"] for post in result[0]] == [10, 12]
    # Distinct ids only reach the database
    assert in_values(fake_session.statements[0]) == [1, 2]


@pytest.mark.asyncio
async def test_duplicate_key_is_not_counted_twice_across_chunks(tx, fake_session):
    result = await posts_loader(tx, chunk_size=2).batch_load([1, 2, 1, 3])

    assert [in_values(statement) for statement in fake_session.statements] == [[1, 2], [3]]
    assert [post["post_id"] for post in result[0]] == [10, 12]
    assert [post["post_id"] for post in result[2]] == [10, 12]


@pytest.mark.asyncio
async def test_empty_batch_issues_no_queries(tx, fake_session):
    assert await posts_loader(tx).batch_load([]) == []
    assert await posts_loader(tx).load_many([]) == []
    assert fake_session.statements == []


@pytest.mark.asyncio
async def test_large_batch_is_split_into_bounded_chunks():
    user_ids = list(range(1, 120_001))
    posts = [
        {"post_id": user_id * 10, "user_id": user_id, "title": f"post {user_id}"}
        for user_id in range(1, 120_001, 997)
    ]

    def answer(statement):
        wanted = set(in_values(statement))
        return FakeResult([post for post in posts if post["user_id"] in wanted])

    chunked_session = FakeSession(answer)
    chunked = await posts_loader(TransactionHandle(chunked_session)).batch_load(user_ids)

    single_session = FakeSession(answer)
    unchunked = await posts_loader(
        TransactionHandle(single_session), chunk_size=len(user_ids)
    ).batch_load(user_ids)

    chunk_sizes = [len(in_values(statement)) for statement in chunked_session.statements]
    assert chunk_sizes == [50_000, 50_000, 20_000]
    assert len(single_session.statements) == 1
    assert chunked == unchunked
    assert len(chunked) == len(user_ids)


@pytest.mark.asyncio
async def test_chunk_count_is_recorded(tx, mocker):
    record_chunks = mocker.patch("blog_gateway.telemetry.record_chunks")

    await posts_loader(tx, chunk_size=1).batch_load([1, 2, 3])

    record_chunks.assert_called_once_with("user_posts", 3)


@pytest.mark.asyncio
async def test_concurrent_loads_use_one_query(tx, fake_session):
    loader = posts_loader(tx)

    results = await asyncio.gather(*(loader.load(user_id) for user_id in [1, 2, 3]))

    assert len(fake_session.statements) == 1
    assert [len(posts) for posts in results] == [2, 1, 0]


@pytest.mark.asyncio
async def test_storage_failure_fails_every_key(blog_store, tx):
    error = OperationalError("SELECT", {}, Exception("server closed the connection"))
    blog_store.failures["posts"] = error
    loader = posts_loader(tx)

    results = await asyncio.gather(
        *(loader.load(user_id) for user_id in [1, 2]), return_exceptions=True
    )

    assert all(result is error for result in results)


@pytest.mark.asyncio
async def test_factory_builds_configured_loaders(tx, fake_session):
    loaders = create_relation_loaders(tx)

    comments = await loaders.post_comments.load(10)
    await loaders.user_posts.load(1)

    assert [comment["comment_id"] for comment in comments] == [100, 102]
    assert [table_name(statement) for statement in fake_session.statements] == [
        "comments",
        "posts",
    ]
    assert loaders.post_comments._chunk_size == 60_000
    assert loaders.user_posts._chunk_size == 50_000
    assert loaders.post_comments._model is Comment


def test_each_transaction_gets_its_own_loaders(fake_session):
    first = create_relation_loaders(TransactionHandle(fake_session))
    second = create_relation_loaders(TransactionHandle(fake_session))

    assert first.user_posts is not second.user_posts
    assert first.post_comments is not second.post_comments
