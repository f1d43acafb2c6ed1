"""Database Session Manager — verifies error mapping, rollback, and the real get_db path.

Tests:
    - SQLAlchemy errors raised inside session() become DatabaseError with the driver message
    - Domain errors pass through session() unchanged
    - Work inside a failed session is rolled back
    - Routes served through the real get_db dependency (no override)
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError

from bookstore.core.errors import BookNotFoundError, DatabaseError
from bookstore.db.base import Base
from bookstore.infrastructure import database as db_module
from bookstore.infrastructure.database import DatabaseSessionManager, init_db
from bookstore.main import app
from bookstore.models.book import Book


@pytest.fixture
async def manager(tmp_path):
    mgr = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'books.db'}")
    async with mgr.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield mgr
    await mgr.close()


async def test_operational_error_mapped_with_driver_message(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM missing_table"))
    assert exc_info.value.http_status == 500
    assert exc_info.value.operation == "execute"
    assert exc_info.value.message == "no such table: missing_table"


async def test_dbapi_error_mapped_to_query_operation(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session():
            raise DBAPIError("SELECT 1", {}, Exception("driver exploded"))
    assert exc_info.value.operation == "query"
    assert exc_info.value.message == "driver exploded"


async def test_raised_operational_error_keeps_cause(manager):
    original = OperationalError("SELECT 1", {}, Exception("database is locked"))
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session():
            raise original
    assert exc_info.value.message == "database is locked"
    assert exc_info.value.__cause__ is original


async def test_domain_errors_pass_through(manager):
    with pytest.raises(BookNotFoundError):
        async with manager.session():
            raise BookNotFoundError("0")


async def test_failed_session_rolls_back(manager):
    with pytest.raises(DatabaseError):
        async with manager.session() as db:
            db.add(Book(
                isbn="92314", amazon_url="http://test.com", author="test",
                language="english", pages=236, publisher="test",
                title="test", year=2023,
            ))
            await db.flush()
            await db.execute(text("SELECT * FROM missing_table"))

    async with manager.session() as db:
        count = await db.execute(text("SELECT COUNT(*) FROM books"))
        assert count.scalar_one() == 0


async def test_routes_use_real_get_db(tmp_path, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    mgr = init_db(f"sqlite+aiosqlite:///{tmp_path / 'routes.db'}")
    async with mgr.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    payload = {
        "isbn": "92314", "amazon_url": "http://test.com", "author": "test",
        "language": "english", "pages": 236, "publisher": "test",
        "title": "test", "year": 2023,
    }
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        ) as client:
            created = await client.post("/books", json=payload)
            listed = await client.get("/books")
    finally:
        await db_module.close_db()

    assert created.status_code == 201
    assert listed.json() == {"books": [payload]}
    assert db_module.db_manager is None
