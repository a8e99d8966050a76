"""Shared pytest fixtures for relstore tests."""

import tempfile
import os
import pytest

from relstore.database.factories import create_sqlite_database
from relstore.domain.authors import AuthorService
from relstore.domain.documents import DocumentService
from relstore.domain.entries import EntryService
from relstore.domain.orders import OrderService
from relstore.domain.parts import PartService
from relstore.domain.physicians import PhysicianService
from relstore.domain.pictures import PictureService
from relstore.domain.store import EntityStore
from relstore.domain.suppliers import SupplierService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def store(temp_db, monkeypatch):
    """Create an EntityStore with the default book limit."""
    monkeypatch.delenv("RELSTORE_BOOK_LIMIT", raising=False)
    return EntityStore(temp_db)


@pytest.fixture
def author_service(store):
    return AuthorService(store)


@pytest.fixture
def document_service(store):
    return DocumentService(store)


@pytest.fixture
def entry_service(store):
    return EntryService(store)


@pytest.fixture
def order_service(store):
    return OrderService(store)


@pytest.fixture
def part_service(store):
    return PartService(store)


@pytest.fixture
def physician_service(store):
    return PhysicianService(store)


@pytest.fixture
def picture_service(store):
    return PictureService(store)


@pytest.fixture
def supplier_service(store):
    return SupplierService(store)


@pytest.fixture
def sample_author(author_service):
    """Create a sample author for testing."""
    author_id = author_service.create_author("Ursula K. Le Guin")
    return author_service.get_author(author_id)


@pytest.fixture
def sample_document(document_service):
    """Create a document with 2 sections of 3 paragraphs each.

    Returns:
        Tuple of (document_id, section_ids, paragraph_ids)
    """
    document_id = document_service.create_document("Handbook")
    section_ids = []
    paragraph_ids = []
    for s in range(2):
        section_id = document_service.add_section(document_id, f"Section {s + 1}")
        section_ids.append(section_id)
        for p in range(3):
            paragraph_ids.append(
                document_service.add_paragraph(section_id, f"Paragraph {s + 1}.{p + 1}")
            )
    return document_id, section_ids, paragraph_ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
