"""Tests for association gates and observers."""

import logging
from types import SimpleNamespace

import pytest

from relstore.domain.associations import Association, AssociationRegistry
from relstore.domain.errors import GateRejectedError, GatingDenied, NotFoundError
from relstore.domain.gates import Gate, GateChain, credit_limit
from relstore.domain.store import EntityStore


class TestGateChain:
    """Tests for GateChain evaluation."""

    def test_empty_chain_allows(self):
        chain = GateChain()
        assert chain.evaluate("Author", SimpleNamespace(id=1), "books", {}, 100) is None

    def test_short_circuits_on_first_deny(self):
        """Test that gates after the first deny are never evaluated."""
        called = []

        def allow(owner, candidate, count):
            called.append("allow")
            return True

        def deny(owner, candidate, count):
            called.append("deny")
            return False

        def never(owner, candidate, count):
            called.append("never")
            return True

        chain = GateChain([Gate("allow", allow), Gate("deny", deny, "closed"), Gate("never", never)])

        denial = chain.evaluate("Teacher", SimpleNamespace(id=4), "students", {}, 0)

        assert called == ["allow", "deny"]
        assert denial == GatingDenied(
            gate="deny", owner_type="Teacher", owner_id=4, association="students", reason="closed"
        )

    def test_credit_limit(self):
        gate = credit_limit(2)
        owner = SimpleNamespace(id=1)

        assert gate.name == "check_credit_limit"
        assert gate.predicate(owner, {}, 0)
        assert gate.predicate(owner, {}, 1)
        assert not gate.predicate(owner, {}, 2)
        assert not gate.predicate(owner, {}, 3)

    def test_denial_message(self):
        denial = GatingDenied("check_credit_limit", "Author", 3, "books", "limit of 2 reached")
        assert denial.message == (
            "Cannot change Author 3.books: rejected by 'check_credit_limit' (limit of 2 reached)"
        )


class TestCreditLimit:
    """Tests for the Author.books credit limit."""

    def test_allows_up_to_limit(self, author_service, sample_author):
        first = author_service.add_book(sample_author.id, "A Wizard of Earthsea")
        second = author_service.add_book(sample_author.id, "The Tombs of Atuan")

        assert first.allowed
        assert second.allowed
        assert author_service.book_count(sample_author.id) == 2

    def test_denies_past_limit(self, author_service, sample_author):
        """Test that the third book is denied and nothing is written."""
        author_service.add_book(sample_author.id, "A Wizard of Earthsea")
        author_service.add_book(sample_author.id, "The Tombs of Atuan")

        result = author_service.add_book(sample_author.id, "The Farthest Shore")

        assert not result.allowed
        assert result.record_id is None
        assert result.denial.gate == "check_credit_limit"
        assert result.denial.owner_type == "Author"
        assert result.denial.owner_id == sample_author.id
        assert result.denial.association == "books"
        assert author_service.book_count(sample_author.id) == 2
        assert [b.title for b in author_service.books(sample_author.id)] == [
            "A Wizard of Earthsea",
            "The Tombs of Atuan",
        ]

    def test_unwrap_raises_on_denial(self, author_service, sample_author):
        author_service.add_book(sample_author.id, "One")
        author_service.add_book(sample_author.id, "Two")

        with pytest.raises(GateRejectedError) as exc_info:
            author_service.add_book(sample_author.id, "Three").unwrap()

        assert exc_info.value.denial.gate == "check_credit_limit"

    def test_limit_is_per_author(self, author_service, sample_author):
        other_id = author_service.create_author("Octavia Butler")
        author_service.add_book(sample_author.id, "One")
        author_service.add_book(sample_author.id, "Two")

        assert author_service.add_book(other_id, "Kindred").allowed

    def test_removal_frees_a_slot(self, author_service, sample_author):
        first = author_service.add_book(sample_author.id, "One").record_id
        author_service.add_book(sample_author.id, "Two")

        assert author_service.remove_book(sample_author.id, first).allowed
        assert author_service.add_book(sample_author.id, "Three").allowed
        assert author_service.book_count(sample_author.id) == 2

    def test_plain_create_runs_the_gate(self, store, author_service, sample_author):
        """Test that creating a Book directly still goes through the gate."""
        store.create("Book", {"title": "One", "author_id": sample_author.id})
        store.create("Book", {"title": "Two", "author_id": sample_author.id})

        with pytest.raises(GateRejectedError):
            store.create("Book", {"title": "Three", "author_id": sample_author.id})

        assert author_service.book_count(sample_author.id) == 2

    def test_moving_a_book_runs_the_gate(self, store, author_service, sample_author):
        """Test that reassigning a book to a full author is denied."""
        other_id = author_service.create_author("Octavia Butler")
        author_service.add_book(sample_author.id, "One")
        author_service.add_book(sample_author.id, "Two")
        stray = author_service.add_book(other_id, "Kindred").record_id

        with pytest.raises(GateRejectedError):
            store.update("Book", stray, {"author_id": sample_author.id})
        assert store.get("Book", stray).author_id == other_id

    def test_moving_a_book_to_an_author_with_room(self, store, author_service, sample_author):
        other_id = author_service.create_author("Octavia Butler")
        book_id = author_service.add_book(sample_author.id, "One").record_id

        store.update("Book", book_id, {"author_id": other_id})

        assert store.get("Book", book_id).author_id == other_id
        assert author_service.book_count(sample_author.id) == 0

    def test_configured_limit(self, temp_db, monkeypatch):
        monkeypatch.setenv("RELSTORE_BOOK_LIMIT", "1")
        store = EntityStore(temp_db)
        author_id = store.create("Author", {"name": "A"})

        assert store.add_association("Author", author_id, "books", {"title": "One"}).allowed
        assert not store.add_association("Author", author_id, "books", {"title": "Two"}).allowed

    def test_missing_author(self, author_service):
        with pytest.raises(NotFoundError):
            author_service.add_book(999, "Orphan")


class TestObservers:
    """Tests for after-add and after-remove observers."""

    def test_addition_and_removal_are_logged(self, author_service, sample_author, caplog):
        with caplog.at_level(logging.INFO, logger="relstore"):
            book_id = author_service.add_book(sample_author.id, "One").record_id
            author_service.remove_book(sample_author.id, book_id)

        assert f"Added books {book_id} to Author {sample_author.id}" in caplog.text
        assert f"Removed books {book_id} from Author {sample_author.id}" in caplog.text

    def test_observers_do_not_run_on_denial(self, temp_db):
        seen = []
        registry = AssociationRegistry()
        registry.define(
            Association(
                "Teacher",
                "students",
                "Student",
                foreign_key="teacher_id",
                before_add=GateChain([Gate("closed", lambda owner, candidate, count: False)]),
                after_add=[lambda name, owner, child: seen.append(child.id)],
            )
        )
        store = EntityStore(temp_db, associations=registry)
        teacher_id = store.create("Teacher", {"name": "T"})

        result = store.add_association("Teacher", teacher_id, "students", {"name": "S"})

        assert result.denial.gate == "closed"
        assert seen == []
        assert store.count("Student") == 0


class TestRemoveGate:
    """Tests for before-remove gates."""

    def test_before_remove_gate_keeps_the_child(self, temp_db):
        registry = AssociationRegistry()
        registry.define(
            Association(
                "Teacher",
                "students",
                "Student",
                foreign_key="teacher_id",
                before_remove=GateChain(
                    [Gate("keep_one", lambda owner, child, count: count > 1, "last student")]
                ),
            )
        )
        store = EntityStore(temp_db, associations=registry)
        teacher_id = store.create("Teacher", {"name": "T"})
        student_id = store.add_association("Teacher", teacher_id, "students", {"name": "S"}).unwrap()

        result = store.remove_association("Teacher", teacher_id, "students", student_id)

        assert result.denial.gate == "keep_one"
        assert result.denial.reason == "last student"
        assert store.count("Student") == 1

    def test_remove_child_of_another_owner(self, store):
        first = store.create("Teacher", {"name": "First"})
        second = store.create("Teacher", {"name": "Second"})
        student_id = store.create("Student", {"name": "S", "teacher_id": second})

        with pytest.raises(NotFoundError):
            store.remove_association("Teacher", first, "students", student_id)
        assert store.count("Student") == 1
