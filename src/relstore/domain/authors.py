"""Author domain service."""

from datetime import datetime
from typing import Optional

from relstore.domain.entities import Author, Book
from relstore.domain.store import AssociationResult, EntityStore
from relstore.utils.date_parser import days_ago


class AuthorService:
    """Service for managing authors and their books."""

    def __init__(self, store: EntityStore):
        """Initialize author service.

        Args:
            store: EntityStore instance
        """
        self.store = store

    def create_author(self, name: str) -> int:
        """Create a new author. Returns author ID."""
        return self.store.create("Author", {"name": name})

    def get_author(self, author_id: int) -> Author:
        return self.store.get("Author", author_id)

    def add_book(
        self, author_id: int, title: str, published_at: Optional[datetime] = None
    ) -> AssociationResult:
        """Add a book to an author, subject to the author's credit limit.

        Args:
            author_id: Author ID
            title: Book title
            published_at: Optional publication timestamp

        Returns:
            AssociationResult holding the new book ID, or the gate denial when
            the author has reached the limit (nothing is written in that case)

        Raises:
            NotFoundError: If the author doesn't exist
        """
        return self.store.add_association(
            "Author", author_id, "books", {"title": title, "published_at": published_at}
        )

    def remove_book(self, author_id: int, book_id: int) -> AssociationResult:
        """Remove (delete) one of the author's books."""
        return self.store.remove_association("Author", author_id, "books", book_id)

    def books(self, author_id: int) -> list[Book]:
        return self.store.associated("Author", author_id, "books")

    def book_count(self, author_id: int) -> int:
        return self.store.count("Book", author_id=author_id)

    def find_by_prefix(self, author_id: int, prefix: str) -> list[Book]:
        """Books of an author whose title starts with ``prefix``."""
        self.store.get("Author", author_id)
        return self.store.db.list_entities(
            "Book", {"author_id": author_id}, prefix=("title", prefix)
        )

    def recent_books(self, author_id: int, days: int = 5, now: Optional[datetime] = None) -> list[Book]:
        """Books of an author created within the last ``days`` days.

        Args:
            author_id: Author ID
            days: Size of the window
            now: Reference time (defaults to the current UTC time)
        """
        self.store.get("Author", author_id)
        return self.store.db.list_entities(
            "Book", {"author_id": author_id}, created_after=days_ago(days, now)
        )
