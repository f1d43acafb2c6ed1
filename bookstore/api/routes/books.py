"""Book Routes — CRUD endpoints for the books resource.

Invariants:
    - Handlers never write error bodies: failures are raised as BookstoreError
      subclasses and rendered by api/error_handlers.py
    - Bodies are validated by core/book_validation.py before any SQL runs
    - Persisted fields come from an allow-list projection (schemas/book.py)
    - Integral floats (236.0) are stored as ints
    - PUT keys the row by the path isbn; body isbn is ignored
    - PUT checks existence before validating, so an unknown isbn is 404 even with no body

Design Decisions:
    - Raw JSON body (Body(None)) instead of a typed Pydantic parameter: violation
      messages must keep their established wording and order
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.book_validation import (
    PayloadKind, normalize_integers, validate_book_payload,
)
from bookstore.core.errors import BookNotFoundError, BookValidationError
from bookstore.infrastructure.database import get_db
from bookstore.models.book import Book
from bookstore.schemas.book import BookCreate, BookResponse, BookUpdate
from bookstore.services.book_repository import BookRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/books", tags=["books"])


def get_book_repository(db: AsyncSession = Depends(get_db)) -> BookRepository:
    return BookRepository(db)


async def get_or_404(repo: BookRepository, isbn: str) -> Book:
    """Get book or raise BookNotFoundError."""
    book = await repo.get_book(isbn)
    if book is None:
        raise BookNotFoundError(isbn)
    return book


def _validated(payload: Any, kind: PayloadKind) -> dict:
    """Validate then project a raw body onto the recognized fields."""
    violations = validate_book_payload(payload, kind)
    if violations:
        raise BookValidationError(violations)
    schema = BookCreate if kind == PayloadKind.CREATE else BookUpdate
    return schema.model_validate(normalize_integers(payload)).model_dump()


def _serialize(book: Book) -> dict:
    return BookResponse.model_validate(book).model_dump()


@router.get("")
async def list_books(repo: BookRepository = Depends(get_book_repository)):
    """List every book, ordered by title."""
    books = await repo.list_books()
    return {"books": [_serialize(b) for b in books]}


@router.get("/{isbn}")
async def get_book(
    isbn: str, repo: BookRepository = Depends(get_book_repository),
):
    book = await get_or_404(repo, isbn)
    return {"book": _serialize(book)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_book(
    payload: Any = Body(None),
    repo: BookRepository = Depends(get_book_repository),
):
    """Create a book from a full payload (isbn included)."""
    fields = _validated(payload, PayloadKind.CREATE)
    book = await repo.create_book(fields)
    return {"book": _serialize(book)}


@router.put("/{isbn}")
async def update_book(
    isbn: str,
    payload: Any = Body(None),
    repo: BookRepository = Depends(get_book_repository),
):
    """Replace every non-key field of an existing book. Unknown keys are dropped."""
    await get_or_404(repo, isbn)
    fields = _validated(payload, PayloadKind.UPDATE)
    book = await repo.update_book(isbn, fields)
    if book is None:
        # deleted between the existence check and the update
        raise BookNotFoundError(isbn)
    return {"book": _serialize(book)}


@router.delete("/{isbn}")
async def delete_book(
    isbn: str, repo: BookRepository = Depends(get_book_repository),
):
    if not await repo.delete_book(isbn):
        raise BookNotFoundError(isbn)
    return {"message": "Book deleted"}
