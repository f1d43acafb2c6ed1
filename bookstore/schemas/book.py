"""Book Schemas — explicit records projecting request bodies and shaping responses.

Invariants:
    - BookCreate carries all eight fields; BookUpdate carries the seven non-key fields
    - extra="ignore": unrecognized keys never reach persistence
    - strict=True: no silent coercion ("236" is not an int)
    - BookResponse field order is the wire order

Design Decisions:
    - Violation messages come from core/book_validation.py, not Pydantic: clients
      depend on the exact message text, so these models only project and type
"""

from pydantic import BaseModel, ConfigDict


class BookUpdate(BaseModel):
    """Replacement values for an existing book. Body isbn is not part of it."""
    model_config = ConfigDict(strict=True, extra="ignore")

    amazon_url: str
    author: str
    language: str
    pages: int
    publisher: str
    title: str
    year: int


class BookCreate(BookUpdate):
    """A new book, including its key."""
    isbn: str


class BookResponse(BaseModel):
    """Public book representation."""
    model_config = ConfigDict(from_attributes=True)

    isbn: str
    amazon_url: str
    author: str
    language: str
    pages: int
    publisher: str
    title: str
    year: int
