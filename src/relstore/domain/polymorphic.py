"""Polymorphic (type tag, id) resolution.

Two shapes exist:

- ``DelegatedType`` is a closed tagged union. Each tag names a concrete
  entity type and carries the behaviour the envelope delegates to it (here,
  the title). New payload types are added by extending the table.
- ``PolymorphicReference`` is an open registry of tag -> existence check. Any
  entity type may be registered as a target; only existence is verified.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from relstore.database.base import Database
from relstore.domain.entities import Comment, Message
from relstore.domain.errors import DanglingReferenceError, UnknownTypeError
from relstore.utils.text import truncate

TITLE_LENGTH = 20


def comment_title(comment: Comment) -> str:
    return truncate(comment.content, TITLE_LENGTH)


def message_title(message: Message) -> str:
    """Subject line, or the truncated body when the subject is blank."""
    if message.subject:
        return message.subject
    return truncate(message.body, TITLE_LENGTH)


@dataclass(frozen=True)
class Variant:
    """One member of a delegated type."""

    entity_type: str
    title: Callable[[Any], str]


class DelegatedType:
    """Closed set of payload types selected by a stored discriminator.

    ``envelope`` is the entity type that stores the ``<role>_type`` and
    ``<role>_id`` pair; deleting an envelope deletes its payload.
    """

    def __init__(self, role: str, envelope: str, variants: Mapping[str, Variant]):
        self.role = role
        self.envelope = envelope
        self.type_field = f"{role}_type"
        self.id_field = f"{role}_id"
        self._variants = dict(variants)

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self._variants)

    def variant(self, tag: str) -> Variant:
        try:
            return self._variants[tag]
        except KeyError:
            raise UnknownTypeError(
                f"'{tag}' is not a valid {self.role} type (expected one of: {', '.join(self.tags)})"
            )

    def resolve(self, db: Database, tag: str, entity_id: int) -> Any:
        """Fetch the payload a (tag, id) pair points at.

        Raises:
            UnknownTypeError: If the tag is not one of the registered types
            DanglingReferenceError: If no such row exists
        """
        variant = self.variant(tag)
        payload = db.get_entity(variant.entity_type, entity_id)
        if payload is None:
            raise DanglingReferenceError(f"{self.role} {tag} {entity_id} does not exist")
        return payload

    def title(self, db: Database, tag: str, entity_id: int) -> str:
        return self.variant(tag).title(self.resolve(db, tag, entity_id))


ExistenceCheck = Callable[[int], bool]


class PolymorphicReference:
    """Open registry of attachment targets for a polymorphic role."""

    def __init__(self, role: str):
        self.role = role
        self._checks: dict[str, ExistenceCheck] = {}

    def register(self, tag: str, exists: ExistenceCheck) -> None:
        self._checks[tag] = exists

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(sorted(self._checks))

    def ensure(self, tag: str, entity_id: int) -> None:
        """Check that the pair resolves to an existing row.

        Raises:
            UnknownTypeError: If no target type is registered under the tag
            DanglingReferenceError: If the target row does not exist
        """
        check = self._checks.get(tag)
        if check is None:
            raise UnknownTypeError(f"'{tag}' is not registered as {self.role}")
        if not check(entity_id):
            raise DanglingReferenceError(f"{self.role} {tag} {entity_id} does not exist")


def entryable() -> DelegatedType:
    """The Entry payload union: Message or Comment."""
    return DelegatedType(
        "entryable",
        "Entry",
        {
            "Message": Variant("Message", message_title),
            "Comment": Variant("Comment", comment_title),
        },
    )


IMAGEABLE_DEFAULTS = ("Employee", "Product", "Author", "Supplier", "Document")


def imageable(db: Database) -> PolymorphicReference:
    """Picture targets, backed by row existence in ``db``."""
    reference = PolymorphicReference("imageable")
    for entity_type in IMAGEABLE_DEFAULTS:
        reference.register(entity_type, exists_in(db, entity_type))
    return reference


def exists_in(db: Database, entity_type: str) -> ExistenceCheck:
    """Existence check for rows of ``entity_type`` in ``db``."""

    def exists(entity_id: int) -> bool:
        return db.entity_exists(entity_type, entity_id)

    return exists
