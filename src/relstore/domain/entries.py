"""Entry domain service: delegated-type envelopes over messages and comments."""

from typing import Optional

from relstore.domain.entities import Entry, Entryable
from relstore.domain.store import EntityStore


class EntryService:
    """Service for entries and their Message/Comment payloads."""

    def __init__(self, store: EntityStore):
        """Initialize entry service.

        Args:
            store: EntityStore instance
        """
        self.store = store
        self.entryable = store.entryable

    def create_message(self, subject: Optional[str], body: Optional[str]) -> int:
        """Create a Message and the Entry wrapping it. Returns entry ID."""
        return self._create_with_payload("Message", {"subject": subject, "body": body})

    def create_comment(self, content: Optional[str]) -> int:
        """Create a Comment and the Entry wrapping it. Returns entry ID."""
        return self._create_with_payload("Comment", {"content": content})

    def _create_with_payload(self, tag: str, values: dict) -> int:
        variant = self.entryable.variant(tag)
        with self.store.db.transaction():
            payload_id = self.store.create(variant.entity_type, values)
            return self.store.create(
                self.entryable.envelope,
                {self.entryable.type_field: tag, self.entryable.id_field: payload_id},
            )

    def get_entry(self, entry_id: int) -> Entry:
        return self.store.get("Entry", entry_id)

    def resolve(self, entry_id: int) -> Entryable:
        """Return the payload an entry wraps.

        Raises:
            NotFoundError: If the entry doesn't exist
            UnknownTypeError: If the entry's type tag is not Message or Comment
            DanglingReferenceError: If the payload row is missing
        """
        entry = self.get_entry(entry_id)
        return self.entryable.resolve(self.store.db, entry.entryable_type, entry.entryable_id)

    def title(self, entry_id: int) -> str:
        """Title delegated to the entry's payload.

        Comments truncate their content to 20 characters; messages use their
        subject.
        """
        entry = self.get_entry(entry_id)
        return self.entryable.title(self.store.db, entry.entryable_type, entry.entryable_id)

    def delete_entry(self, entry_id: int) -> int:
        """Delete an entry and its payload. Returns rows removed."""
        return self.store.delete("Entry", entry_id)
