"""Shared domain error messages and error types."""

from dataclasses import dataclass
from typing import Optional, Sequence


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class UnknownTypeError(DomainError):
    """Polymorphic type tag is not registered for the role."""


class DanglingReferenceError(DomainError):
    """Polymorphic (type, id) pair points at a row that does not exist."""


class CascadeError(DomainError):
    """A cascade delete failed and was rolled back as a whole.

    The original failure is chained as ``__cause__``.
    """

    def __init__(self, message: str, closure: Sequence[tuple[str, int]] = ()):
        super().__init__(message)
        self.closure = list(closure)


class GateRejectedError(DomainError):
    """Raised by ``AssociationResult.unwrap()`` when a gate denied the change."""

    def __init__(self, denial: "GatingDenied"):
        super().__init__(denial.message)
        self.denial = denial


@dataclass(frozen=True)
class GatingDenied:
    """Outcome of an association gate veto.

    This is a value, not an exception: a denied mutation is a normal result
    the caller branches on.
    """

    gate: str
    owner_type: str
    owner_id: int
    association: str
    reason: Optional[str] = None

    @property
    def message(self) -> str:
        text = (
            f"Cannot change {self.owner_type} {self.owner_id}.{self.association}: "
            f"rejected by '{self.gate}'"
        )
        if self.reason:
            text += f" ({self.reason})"
        return text


def not_found(entity_type: str, entity_id: object) -> str:
    """Return message for a missing entity."""
    return f"{entity_type} {entity_id} not found"


def unknown_entity_type(entity_type: str) -> str:
    """Return message for an unregistered entity type."""
    return f"Unknown entity type '{entity_type}'"


def unknown_association(owner_type: str, association: str) -> str:
    """Return message for an undefined association."""
    return f"{owner_type} has no association '{association}'"


def missing_required(entity_type: str, field_names: Sequence[str]) -> str:
    """Return message for required fields that were not supplied."""
    return f"{entity_type} requires: {', '.join(sorted(field_names))}"


def unknown_fields(entity_type: str, field_names: Sequence[str]) -> str:
    """Return message for fields the entity does not have."""
    return f"{entity_type} has no field(s): {', '.join(sorted(field_names))}"


def dangling_owner(entity_type: str, field_name: str, owner_type: str, owner_id: int) -> str:
    """Return message for a belongs-to reference that does not resolve."""
    return f"{entity_type}.{field_name} references missing {owner_type} {owner_id}"


def duplicate_join(table: str, key: Sequence[int]) -> str:
    """Return message for a join row whose key already exists."""
    return f"{table} row {tuple(key)} already exists"
