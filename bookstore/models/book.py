"""Book ORM — the single persisted entity, keyed by isbn.

Invariants:
    - isbn is the primary key (caller-supplied text, never generated)
    - All eight columns are non-nullable
    - Column order mirrors the API field order

Design Decisions:
    - Text over String(n): the API imposes no length limits
    - isbn never appears in UPDATE values: the row key is immutable after creation
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.db.base import Base


class Book(Base):
    """A book in the catalog."""
    __tablename__ = "books"

    isbn: Mapped[str] = mapped_column(Text, primary_key=True)
    amazon_url: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    language: Mapped[str] = mapped_column(Text, nullable=False)
    pages: Mapped[int] = mapped_column(Integer, nullable=False)
    publisher: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Book isbn={self.isbn!r} title={self.title!r}>"
