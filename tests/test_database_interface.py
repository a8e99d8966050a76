"""Tests for the SQLAlchemy database layer."""

import pytest

from relstore.database.base import Database
from relstore.database.sqlalchemy_db import OWNER_LOCK_STRIPES, SQLAlchemyDatabase
from relstore.domain.entities import Author
from relstore.domain.errors import ValidationError


def test_implements_interface(temp_db):
    assert isinstance(temp_db, Database)
    assert isinstance(temp_db, SQLAlchemyDatabase)
    assert temp_db.database_url == f"sqlite:///{temp_db.database_path}"


def test_create_and_get_entity(temp_db):
    author_id = temp_db.create_entity("Author", {"name": "Ada"})

    author = temp_db.get_entity("Author", author_id)
    assert isinstance(author, Author)
    assert author.name == "Ada"
    assert temp_db.entity_exists("Author", author_id)
    assert not temp_db.entity_exists("Author", author_id + 1)
    assert temp_db.get_entity("Author", author_id + 1) is None


def test_transaction_commits(temp_db):
    with temp_db.transaction():
        temp_db.create_entity("Author", {"name": "One"})
        temp_db.create_entity("Author", {"name": "Two"})

    assert temp_db.count_entities("Author") == 2


def test_transaction_rolls_back_on_error(temp_db):
    """Test that an exception undoes every write in the unit."""
    with pytest.raises(RuntimeError):
        with temp_db.transaction():
            temp_db.create_entity("Author", {"name": "One"})
            with temp_db.transaction():
                temp_db.create_entity("Author", {"name": "Two"})
            raise RuntimeError("abort")

    assert temp_db.count_entities("Author") == 0


def test_inner_failure_rolls_back_outer_unit(temp_db):
    with pytest.raises(RuntimeError):
        with temp_db.transaction():
            temp_db.create_entity("Author", {"name": "One"})
            with temp_db.transaction():
                raise RuntimeError("abort")

    assert temp_db.count_entities("Author") == 0


def test_constraint_violation(temp_db):
    """Test that the database itself rejects a book without an author."""
    with pytest.raises(ValidationError, match="violates a database constraint"):
        temp_db.create_entity("Book", {"title": "Orphan", "author_id": 999})

    assert temp_db.count_entities("Book") == 0


def test_unknown_entity_type(temp_db):
    with pytest.raises(ValidationError):
        temp_db.get_entity("Widget", 1)


def test_list_entities_filters(temp_db):
    temp_db.create_entity("Assembly", {"name": "On", "active": True})
    temp_db.create_entity("Assembly", {"name": "Off", "active": False})

    assert [a.name for a in temp_db.list_entities("Assembly", {"active": False})] == ["Off"]
    assert temp_db.count_entities("Assembly", {"active": True}) == 1


def test_lock_owner_reads_the_owner(temp_db):
    author_id = temp_db.create_entity("Author", {"name": "Ada"})

    with temp_db.lock_owner("Author", author_id) as owner:
        assert owner.name == "Ada"
    with temp_db.lock_owner("Author", author_id + 1) as owner:
        assert owner is None


def test_owner_locks_are_bounded(temp_db):
    """Test that locking many owners reuses a fixed set of locks."""
    for author_id in range(1, 1000):
        with temp_db.lock_owner("Author", author_id):
            pass

    assert len(temp_db._owner_locks) == OWNER_LOCK_STRIPES
    assert temp_db._owner_lock("Author", 7) is temp_db._owner_lock("Author", 7)


def test_owner_lock_is_reentrant(temp_db):
    author_id = temp_db.create_entity("Author", {"name": "Ada"})

    with temp_db.lock_owner("Author", author_id):
        with temp_db.lock_owner("Author", author_id) as owner:
            assert owner.id == author_id


def test_delete_join_rows(temp_db):
    assembly_id = temp_db.create_entity("Assembly", {"name": "Engine", "active": True})
    first = temp_db.create_entity("Part", {"part_number": "P-1"})
    second = temp_db.create_entity("Part", {"part_number": "P-2"})
    temp_db.link_assembly_part(assembly_id, first)
    temp_db.link_assembly_part(assembly_id, second)

    assert temp_db.delete_join_rows("assemblies_parts", "part_id", first) == 1
    assert not temp_db.assembly_part_linked(assembly_id, first)
    assert temp_db.assembly_part_linked(assembly_id, second)
