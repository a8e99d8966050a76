"""Tests for CLI commands."""

import pytest

from relstore.cli.main import cli


@pytest.fixture(autouse=True)
def default_book_limit(monkeypatch):
    monkeypatch.delenv("RELSTORE_BOOK_LIMIT", raising=False)


def invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def test_help_does_not_need_a_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "author" in result.output
    assert "document" in result.output


def test_init(cli_runner, temp_db):
    result = invoke(cli_runner, temp_db, "init")

    assert result.exit_code == 0
    assert temp_db.database_path in result.output


def test_author_create(cli_runner, temp_db):
    result = invoke(cli_runner, temp_db, "author", "create", "Ada")

    assert result.exit_code == 0
    assert "Created author 'Ada' (ID: 1)" in result.output


def test_author_add_book_until_denied(cli_runner, temp_db, author_service, sample_author):
    """Test that the third book is refused with the gate's message."""
    author_id = str(sample_author.id)

    first = invoke(cli_runner, temp_db, "author", "add-book", author_id, "One", "--published-at", "2024-01-15")
    second = invoke(cli_runner, temp_db, "author", "add-book", author_id, "Two")
    third = invoke(cli_runner, temp_db, "author", "add-book", author_id, "Three")

    assert first.exit_code == 0
    assert "Added book 'One'" in first.output
    assert second.exit_code == 0
    assert third.exit_code == 1
    assert "check_credit_limit" in third.output
    assert author_service.book_count(sample_author.id) == 2


def test_author_add_book_bad_date(cli_runner, temp_db, sample_author):
    result = invoke(
        cli_runner, temp_db, "author", "add-book", str(sample_author.id), "One", "--published-at", "someday"
    )

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_author_books(cli_runner, temp_db, author_service, sample_author):
    author_service.add_book(sample_author.id, "The Dispossessed")
    author_service.add_book(sample_author.id, "Lavinia")

    listed = invoke(cli_runner, temp_db, "author", "books", str(sample_author.id))
    filtered = invoke(cli_runner, temp_db, "author", "books", str(sample_author.id), "--prefix", "The")

    assert listed.exit_code == 0
    assert "The Dispossessed" in listed.output
    assert "Lavinia" in listed.output
    assert "Lavinia" not in filtered.output


def test_author_books_missing_author(cli_runner, temp_db):
    result = invoke(cli_runner, temp_db, "author", "books", "999")

    assert result.exit_code == 1
    assert "Author 999 not found" in result.output


def test_document_commands(cli_runner, temp_db, store):
    assert invoke(cli_runner, temp_db, "document", "create", "Handbook").exit_code == 0
    assert invoke(cli_runner, temp_db, "document", "add-section", "1", "Intro").exit_code == 0
    assert invoke(cli_runner, temp_db, "document", "add-paragraph", "1", "Hello").exit_code == 0

    shown = invoke(cli_runner, temp_db, "document", "show", "1")
    assert "Handbook" in shown.output
    assert "Intro (1 paragraph(s))" in shown.output

    assert store.count("Paragraph") == 1


def test_document_delete(cli_runner, temp_db, store, sample_document):
    document_id, _, _ = sample_document

    result = invoke(cli_runner, temp_db, "document", "delete", str(document_id), "--force")

    assert result.exit_code == 0
    assert "9 row(s) removed" in result.output
    assert store.count("Paragraph") == 0


def test_document_delete_cancelled(cli_runner, temp_db, store, sample_document):
    document_id, _, _ = sample_document

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "document", "delete", str(document_id)], input="n\n"
    )

    assert "Deletion cancelled." in result.output
    assert store.count("Document") == 1


def test_entry_commands(cli_runner, temp_db, store):
    created = invoke(cli_runner, temp_db, "entry", "create-comment", "This is a very long comment body")
    assert created.exit_code == 0

    title = invoke(cli_runner, temp_db, "entry", "title", "1")
    assert title.output.strip() == "This is a very long…"

    deleted = invoke(cli_runner, temp_db, "entry", "delete", "1")
    assert "2 row(s) removed" in deleted.output
    assert store.count("Comment") == 0


def test_entry_message(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "entry", "create-message", "Status", "--body", "All good")

    title = invoke(cli_runner, temp_db, "entry", "title", "1")

    assert title.output.strip() == "Status"


def test_order_commands(cli_runner, temp_db, order_service):
    invoke(cli_runner, temp_db, "order", "create", "--reference", "PO-1")
    invoke(cli_runner, temp_db, "order", "create-product", "Widget")

    added = invoke(cli_runner, temp_db, "order", "add-product", "1", "1", "--quantity", "3")
    assert added.exit_code == 0

    duplicate = invoke(cli_runner, temp_db, "order", "add-product", "1", "1")
    assert duplicate.exit_code == 1
    assert "already exists" in duplicate.output

    changed = invoke(cli_runner, temp_db, "order", "set-quantity", "1", "1", "5")
    assert changed.exit_code == 0
    assert order_service.get_join(1, 1).quantity == 5

    shown = invoke(cli_runner, temp_db, "order", "show", "1")
    assert "Widget" in shown.output


def test_order_set_quantity_invalid(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "order", "create")
    invoke(cli_runner, temp_db, "order", "create-product", "Widget")
    invoke(cli_runner, temp_db, "order", "add-product", "1", "1")

    result = invoke(cli_runner, temp_db, "order", "set-quantity", "1", "1", "0")

    assert result.exit_code == 1
    assert "at least 1" in result.output
