"""Document domain service."""

from typing import Optional

from relstore.domain.entities import Paragraph, Section
from relstore.domain.store import EntityStore


class DocumentService:
    """Service for documents and their section/paragraph hierarchy."""

    def __init__(self, store: EntityStore):
        """Initialize document service.

        Args:
            store: EntityStore instance
        """
        self.store = store

    def create_document(self, title: Optional[str]) -> int:
        return self.store.create("Document", {"title": title})

    def add_section(self, document_id: int, title: Optional[str]) -> int:
        """Add a section to a document. Returns section ID.

        Raises:
            NotFoundError: If the document doesn't exist
        """
        return self.store.add_association(
            "Document", document_id, "sections", {"title": title}
        ).unwrap()

    def add_paragraph(self, section_id: int, content: Optional[str]) -> int:
        """Add a paragraph to a section. Returns paragraph ID.

        Raises:
            NotFoundError: If the section doesn't exist
        """
        return self.store.add_association(
            "Section", section_id, "paragraphs", {"content": content}
        ).unwrap()

    def sections(self, document_id: int) -> list[Section]:
        return self.store.associated("Document", document_id, "sections")

    def paragraphs(self, section_id: int) -> list[Paragraph]:
        return self.store.associated("Section", section_id, "paragraphs")

    def outline(self, document_id: int) -> list[tuple[Section, list[Paragraph]]]:
        """Sections of a document, each with its paragraphs."""
        return [(section, self.paragraphs(section.id)) for section in self.sections(document_id)]

    def delete_document(self, document_id: int) -> int:
        """Delete a document with all of its sections and paragraphs.

        Returns:
            Number of rows removed (1 + sections + paragraphs)

        Raises:
            NotFoundError: If the document doesn't exist
            CascadeError: If any row could not be removed; nothing is removed
        """
        return self.store.delete("Document", document_id)
