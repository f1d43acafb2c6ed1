"""Book Repository — verifies statements, ordering, and not-found signals against SQLite.

Invariants:
    - list_books orders by title, not insertion order
    - get/update return None and delete returns False for unknown isbns
    - update never rewrites the key
    - duplicate isbn on create surfaces as DatabaseError
"""

import pytest

from bookstore.core.errors import DatabaseError
from bookstore.services.book_repository import BookRepository
from tests.services.book_data import HARRY_POTTER, POWER_UP, make_payload


@pytest.fixture
def repo(test_db):
    return BookRepository(test_db)


async def test_list_books_orders_by_title(repo, seed_books):
    books = await repo.list_books()
    assert [b.isbn for b in books] == [HARRY_POTTER["isbn"], POWER_UP["isbn"]]


async def test_list_books_empty_table(repo):
    assert await repo.list_books() == []


async def test_get_book_returns_row(repo, seed_books):
    book = await repo.get_book(POWER_UP["isbn"])
    assert book is not None
    assert book.title == POWER_UP["title"]


async def test_get_book_unknown_isbn_returns_none(repo, seed_books):
    assert await repo.get_book("0") is None


async def test_create_book_returns_inserted_row(repo):
    book = await repo.create_book(make_payload())
    assert book.isbn == "92314"
    assert book.pages == 236
    assert (await repo.get_book("92314")) is not None


async def test_create_duplicate_isbn_raises_database_error(repo, seed_books):
    with pytest.raises(DatabaseError) as exc_info:
        await repo.create_book(make_payload(isbn=POWER_UP["isbn"]))
    assert exc_info.value.http_status == 500
    assert exc_info.value.operation == "insert"
    assert "isbn" in exc_info.value.message


async def test_create_after_duplicate_still_works(repo, seed_books):
    with pytest.raises(DatabaseError):
        await repo.create_book(make_payload(isbn=POWER_UP["isbn"]))
    book = await repo.create_book(make_payload())
    assert book.isbn == "92314"


async def test_update_book_replaces_fields_but_not_isbn(repo, seed_books):
    fields = make_payload(isbn="should-be-ignored", author="UPDATING AUTHOR")
    book = await repo.update_book(POWER_UP["isbn"], fields)
    assert book is not None
    assert book.isbn == POWER_UP["isbn"]
    assert book.author == "UPDATING AUTHOR"
    assert await repo.get_book("should-be-ignored") is None


async def test_update_unknown_isbn_returns_none(repo, seed_books):
    assert await repo.update_book("0", make_payload()) is None


async def test_delete_book(repo, seed_books):
    assert await repo.delete_book(POWER_UP["isbn"]) is True
    assert await repo.get_book(POWER_UP["isbn"]) is None


async def test_delete_unknown_isbn_returns_false(repo, seed_books):
    assert await repo.delete_book("0") is False
    assert len(await repo.list_books()) == 2
