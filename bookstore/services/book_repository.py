"""Book Repository — one parameterized statement per operation against the books table.

Invariants:
    - Never opens or closes connections: the AsyncSession is injected by the caller
    - Not-found is a return value (None / False), never an exception
    - Every write commits; a failed write is rolled back before the error leaves
    - isbn is never part of UPDATE values (row key is immutable)
    - list_books orders by title ascending

Design Decisions:
    - INSERT/UPDATE ... RETURNING: the row written is the row returned, no second SELECT
    - Duplicate isbn on insert mapped explicitly to DatabaseError (500, driver message)
      rather than left as an unannotated fallthrough
"""

import logging
from collections.abc import Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.errors import DatabaseError
from bookstore.infrastructure.database import describe_db_error
from bookstore.models.book import Book

logger = logging.getLogger(__name__)


class BookRepository:
    """Data access for the books table, bound to one request-scoped session."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_books(self) -> Sequence[Book]:
        result = await self._db.execute(select(Book).order_by(Book.title.asc()))
        return result.scalars().all()

    async def get_book(self, isbn: str) -> Book | None:
        result = await self._db.execute(select(Book).where(Book.isbn == isbn))
        return result.scalar_one_or_none()

    async def create_book(self, fields: dict) -> Book:
        """Insert a new row. Raises DatabaseError if the isbn already exists."""
        try:
            result = await self._db.execute(
                insert(Book).values(**fields).returning(Book),
            )
            book = result.scalar_one()
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.error(
                f"Insert rejected for isbn {fields.get('isbn')!r}: {e}",
                extra={"isbn": fields.get("isbn"), "operation": "insert"},
            )
            raise DatabaseError(describe_db_error(e), "insert") from e
        logger.info(
            f"Book {book.isbn} created",
            extra={"isbn": book.isbn, "operation": "insert"},
        )
        return book

    async def update_book(self, isbn: str, fields: dict) -> Book | None:
        """Replace the non-key columns of one row. None when no row matched."""
        values = {k: v for k, v in fields.items() if k != "isbn"}
        result = await self._db.execute(
            update(Book)
            .where(Book.isbn == isbn)
            .values(**values)
            .returning(Book)
            .execution_options(populate_existing=True),
        )
        book = result.scalar_one_or_none()
        await self._db.commit()
        if book is not None:
            logger.info(
                f"Book {isbn} updated",
                extra={"isbn": isbn, "operation": "update"},
            )
        return book

    async def delete_book(self, isbn: str) -> bool:
        """Delete one row. False when no row matched."""
        result = await self._db.execute(
            delete(Book).where(Book.isbn == isbn).returning(Book.isbn),
        )
        deleted = result.scalar_one_or_none()
        await self._db.commit()
        if deleted is None:
            return False
        logger.info(
            f"Book {isbn} deleted",
            extra={"isbn": isbn, "operation": "delete"},
        )
        return True
