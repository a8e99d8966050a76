"""Field-level schema facts the store validates against before writing."""

from dataclasses import fields

from relstore.domain import entities

ENTITY_TYPES: dict[str, type] = {
    "Author": entities.Author,
    "Book": entities.Book,
    "Supplier": entities.Supplier,
    "Account": entities.Account,
    "AccountHistory": entities.AccountHistory,
    "Document": entities.Document,
    "Section": entities.Section,
    "Paragraph": entities.Paragraph,
    "Assembly": entities.Assembly,
    "Part": entities.Part,
    "Order": entities.Order,
    "Product": entities.Product,
    "Message": entities.Message,
    "Comment": entities.Comment,
    "Entry": entities.Entry,
    "Picture": entities.Picture,
    "Employee": entities.Employee,
    "Teacher": entities.Teacher,
    "Student": entities.Student,
    "Physician": entities.Physician,
    "Patient": entities.Patient,
    "Appointment": entities.Appointment,
}

# Columns managed by the store, never written by callers
MANAGED_FIELDS = frozenset({"id", "created_at", "updated_at"})

REQUIRED_FIELDS: dict[str, frozenset[str]] = {
    "Book": frozenset({"author_id"}),
    "Account": frozenset({"supplier_id"}),
    "AccountHistory": frozenset({"account_id"}),
    "Section": frozenset({"document_id"}),
    "Paragraph": frozenset({"section_id"}),
    "Entry": frozenset({"entryable_type", "entryable_id"}),
    "Picture": frozenset({"name"}),
    "Employee": frozenset({"name"}),
    "Student": frozenset({"teacher_id"}),
}

# entity type -> {foreign key field: owner entity type}
BELONGS_TO: dict[str, dict[str, str]] = {
    "Book": {"author_id": "Author"},
    "Account": {"supplier_id": "Supplier"},
    "AccountHistory": {"account_id": "Account"},
    "Section": {"document_id": "Document"},
    "Paragraph": {"section_id": "Section"},
    "Student": {"teacher_id": "Teacher"},
    "Appointment": {"physician_id": "Physician", "patient_id": "Patient"},
}


def writable_fields(entity_type: str) -> frozenset[str]:
    """Return the fields a caller may set on an entity type."""
    return frozenset(f.name for f in fields(ENTITY_TYPES[entity_type])) - MANAGED_FIELDS
