"""Entity store: typed CRUD, gated association changes and cascade deletes."""

from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

from relstore.config import get_book_limit
from relstore.database.base import Database
from relstore.domain import polymorphic
from relstore.domain.associations import HAS_MANY, Association, AssociationRegistry, default_associations
from relstore.domain.cascade import Row, delete_closure
from relstore.domain.errors import (
    CascadeError,
    ConflictError,
    DependencyError,
    DomainError,
    GateRejectedError,
    GatingDenied,
    NotFoundError,
    ValidationError,
    dangling_owner,
    missing_required,
    not_found,
    unknown_entity_type,
    unknown_fields,
)
from relstore.domain.schema import BELONGS_TO, ENTITY_TYPES, REQUIRED_FIELDS, writable_fields
from relstore.utils.logging import get_logger

logger = get_logger("store")


@dataclass(frozen=True)
class AssociationResult:
    """Outcome of a gated association change.

    Exactly one of ``record_id`` and ``denial`` is set.
    """

    record_id: Optional[int] = None
    denial: Optional[GatingDenied] = None

    @property
    def allowed(self) -> bool:
        return self.denial is None

    def unwrap(self) -> int:
        """Return the record id, raising GateRejectedError if the change was denied."""
        if self.denial is not None:
            raise GateRejectedError(self.denial)
        return self.record_id


class EntityStore:
    """Service for reading and writing every entity type.

    Args:
        db: Database instance
        associations: Association registry; defaults to the stock schema with
            the book limit from RELSTORE_BOOK_LIMIT
        entryable: Delegated type for Entry payloads
        imageable: Picture target registry
    """

    def __init__(
        self,
        db: Database,
        associations: Optional[AssociationRegistry] = None,
        entryable: Optional[polymorphic.DelegatedType] = None,
        imageable: Optional[polymorphic.PolymorphicReference] = None,
    ):
        self.db = db
        self.associations = associations or default_associations(get_book_limit())
        self.entryable = entryable or polymorphic.entryable()
        self.imageable = imageable or polymorphic.imageable(db)

    # CRUD
    def create(self, entity_type: str, values: Mapping[str, Any]) -> int:
        """Create an entity.

        A foreign key that joins a gated association (Book.author_id) is
        routed through ``add_association`` so its gates run.

        Returns:
            New entity ID

        Raises:
            ValidationError: If fields are missing, unknown or reference missing rows
            UnknownTypeError, DanglingReferenceError: If a polymorphic pair does not resolve
            ConflictError: If the Entry payload is already wrapped by another Entry
            GateRejectedError: If a gate denied joining the owner's association
        """
        values = self._validate(entity_type, values, creating=True)

        gated = self._gated_reference(entity_type, values)
        if gated is not None:
            association, owner_id = gated
            child_values = {k: v for k, v in values.items() if k != association.foreign_key}
            return self.add_association(
                association.owner_type, owner_id, association.name, child_values
            ).unwrap()

        with self.db.transaction():
            self._check_references(entity_type, values)
            return self.db.create_entity(entity_type, values)

    def get(self, entity_type: str, entity_id: int) -> Any:
        """Get an entity by ID.

        Raises:
            NotFoundError: If the entity does not exist
        """
        self._require_type(entity_type)
        entity = self.db.get_entity(entity_type, entity_id)
        if entity is None:
            raise NotFoundError(not_found(entity_type, entity_id))
        return entity

    def update(self, entity_type: str, entity_id: int, patch: Mapping[str, Any]) -> None:
        """Apply a field patch to an entity.

        Raises:
            NotFoundError: If the entity does not exist
            ValidationError: If the patch is invalid
            ConflictError: If an Entry is pointed at a payload another Entry wraps
            GateRejectedError: If moving the entity into a gated association was denied
        """
        values = self._validate(entity_type, patch, creating=False)
        current = self.get(entity_type, entity_id)

        gated = self._gated_reference(entity_type, values)
        if gated is not None and getattr(current, gated[0].foreign_key) != gated[1]:
            association, owner_id = gated
            with self.db.lock_owner(association.owner_type, owner_id) as owner:
                if owner is None:
                    raise ValidationError(
                        dangling_owner(entity_type, association.foreign_key, association.owner_type, owner_id)
                    )
                denial = association.before_add.evaluate(
                    association.owner_type,
                    owner,
                    association.name,
                    current,
                    self.db.count_related(association, owner_id),
                )
                if denial is not None:
                    raise GateRejectedError(denial)
                self._write_update(entity_type, entity_id, values, current)
            return

        with self.db.transaction():
            self._write_update(entity_type, entity_id, values, current)

    def _write_update(self, entity_type: str, entity_id: int, values: dict[str, Any], current: Any) -> None:
        self._check_references(
            entity_type, {**asdict(current), **values}, only=values.keys(), entity_id=entity_id
        )
        self.db.update_entity(entity_type, entity_id, values)

    def delete(self, entity_type: str, entity_id: int) -> int:
        """Delete an entity and everything that cascades from it.

        The delete closure is computed before any row is removed and the
        whole closure is removed in one transaction. Join rows of
        ``delete_join_rows`` associations are cleared first. A row that an
        Entry or Picture outside the closure still points at blocks the delete.

        Returns:
            Number of rows removed

        Raises:
            NotFoundError: If the entity does not exist
            CascadeError: If any row could not be removed or is still the target of
                an Entry or Picture; nothing is removed
        """
        self._require_type(entity_type)
        with self.db.transaction():
            if not self.db.entity_exists(entity_type, entity_id):
                raise NotFoundError(not_found(entity_type, entity_id))
            closure = delete_closure(entity_type, entity_id, self._dependents_of)
            try:
                self._check_unreferenced(closure)
                for row_type, row_id in closure:
                    for association in self.associations.join_rows_of(row_type):
                        self.db.delete_join_rows(association.join_table, association.owner_key, row_id)
                removed = self.db.delete_rows(closure)
            except DomainError as e:
                raise CascadeError(
                    f"Could not delete {entity_type} {entity_id}; "
                    f"{len(closure)} row(s) left in place: {e}",
                    closure,
                ) from e
        logger.info("Deleted %s %s (%d row(s))", entity_type, entity_id, removed)
        return removed

    def find(self, entity_type: str, **filters: Any) -> list[Any]:
        """List entities of a type, optionally filtered by field equality."""
        self._require_type(entity_type)
        return self.db.list_entities(entity_type, filters)

    def count(self, entity_type: str, **filters: Any) -> int:
        self._require_type(entity_type)
        return self.db.count_entities(entity_type, filters)

    # Associations
    def add_association(
        self, owner_type: str, owner_id: int, name: str, values: Mapping[str, Any]
    ) -> AssociationResult:
        """Add a new child to an owner's has_many association.

        The owner is locked, the association's gates are evaluated against
        its current child count and, only if every gate allows, the child is
        inserted. On denial nothing is written.

        Args:
            owner_type: Owner entity type (e.g. "Author")
            owner_id: Owner ID
            name: Association name (e.g. "books")
            values: Child fields, without the foreign key

        Returns:
            AssociationResult with the new child ID, or the denial

        Raises:
            NotFoundError: If the owner or association does not exist
            ValidationError: If the child fields are invalid
        """
        association = self._has_many(owner_type, name)
        values = self._validate(
            association.child_type,
            {**values, association.foreign_key: owner_id},
            creating=True,
        )

        with self.db.lock_owner(owner_type, owner_id) as owner:
            if owner is None:
                raise NotFoundError(not_found(owner_type, owner_id))
            existing = self.db.count_related(association, owner_id)
            denial = association.before_add.evaluate(owner_type, owner, name, values, existing)
            if denial is not None:
                return AssociationResult(denial=denial)
            self._check_references(association.child_type, values)
            child_id = self.db.create_entity(association.child_type, values)

        child = self.get(association.child_type, child_id)
        for observer in association.after_add:
            observer(name, owner, child)
        return AssociationResult(record_id=child_id)

    def remove_association(
        self, owner_type: str, owner_id: int, name: str, child_id: int
    ) -> AssociationResult:
        """Remove a child from an owner's has_many association.

        The child's foreign key is NOT NULL, so removal deletes the child
        (and whatever cascades from it).

        Raises:
            NotFoundError: If the owner does not exist or the child is not in the association
        """
        association = self._has_many(owner_type, name)

        with self.db.lock_owner(owner_type, owner_id) as owner:
            if owner is None:
                raise NotFoundError(not_found(owner_type, owner_id))
            child = self.db.get_entity(association.child_type, child_id)
            if child is None or getattr(child, association.foreign_key) != owner_id:
                raise NotFoundError(
                    f"{association.child_type} {child_id} is not in {owner_type} {owner_id}.{name}"
                )
            existing = self.db.count_related(association, owner_id)
            denial = association.before_remove.evaluate(owner_type, owner, name, child, existing)
            if denial is not None:
                return AssociationResult(denial=denial)
            self.delete(association.child_type, child_id)

        for observer in association.after_remove:
            observer(name, owner, child)
        return AssociationResult(record_id=child_id)

    def associated(self, owner_type: str, owner_id: int, name: str) -> list[Any]:
        """Read children through an association, with its scope applied."""
        association = self.associations.get(owner_type, name)
        if not self.db.entity_exists(owner_type, owner_id):
            raise NotFoundError(not_found(owner_type, owner_id))
        return self.db.list_related(association, owner_id)

    def _has_many(self, owner_type: str, name: str) -> Association:
        association = self.associations.get(owner_type, name)
        if association.kind != HAS_MANY:
            raise ValidationError(
                f"{owner_type}.{name} goes through {association.join_table}; "
                "write the join row instead"
            )
        return association

    def _gated_reference(
        self, entity_type: str, values: Mapping[str, Any]
    ) -> Optional[tuple[Association, int]]:
        for foreign_key in BELONGS_TO.get(entity_type, {}):
            if values.get(foreign_key) is None:
                continue
            association = self.associations.gated_by_foreign_key(entity_type, foreign_key)
            if association is not None:
                return association, values[foreign_key]
        return None

    # Cascades
    def _dependents_of(self, entity_type: str, entity_id: int) -> list[Row]:
        rows: list[Row] = []
        for association in self.associations.dependents(entity_type):
            rows.extend(
                (association.child_type, child.id)
                for child in self.db.list_related(association, entity_id)
            )
        if entity_type == self.entryable.envelope:
            envelope = self.db.get_entity(entity_type, entity_id)
            tag = getattr(envelope, self.entryable.type_field)
            payload_id = getattr(envelope, self.entryable.id_field)
            try:
                payload = self.entryable.resolve(self.db, tag, payload_id)
            except DomainError as e:
                logger.warning("%s %s has no payload to delete: %s", entity_type, entity_id, e)
            else:
                rows.append((self.entryable.variant(tag).entity_type, payload.id))
        return rows

    def _polymorphic_referrers(self, entity_type: str, entity_id: int) -> list[Row]:
        """Entries and Pictures whose (type, id) pair points at the row."""
        rows: list[Row] = []
        envelope = self.entryable.envelope
        for tag in self.entryable.tags:
            if self.entryable.variant(tag).entity_type != entity_type:
                continue
            filters = {self.entryable.type_field: tag, self.entryable.id_field: entity_id}
            rows.extend((envelope, entry.id) for entry in self.db.list_entities(envelope, filters))
        if entity_type in self.imageable.tags:
            filters = {"imageable_type": entity_type, "imageable_id": entity_id}
            rows.extend(("Picture", picture.id) for picture in self.db.list_entities("Picture", filters))
        return rows

    def _check_unreferenced(self, closure: list[Row]) -> None:
        doomed = set(closure)
        for row in closure:
            for referrer in self._polymorphic_referrers(*row):
                if referrer not in doomed:
                    raise DependencyError(
                        f"{row[0]} {row[1]} is still referenced by {referrer[0]} {referrer[1]}"
                    )

    # Validation
    def _require_type(self, entity_type: str) -> None:
        if entity_type not in ENTITY_TYPES:
            raise ValidationError(unknown_entity_type(entity_type))

    def _validate(self, entity_type: str, values: Mapping[str, Any], creating: bool) -> dict[str, Any]:
        self._require_type(entity_type)
        values = dict(values)

        unknown = set(values) - writable_fields(entity_type)
        if unknown:
            raise ValidationError(unknown_fields(entity_type, sorted(unknown)))

        required = REQUIRED_FIELDS.get(entity_type, frozenset())
        if creating:
            missing = {name for name in required if values.get(name) is None}
        else:
            missing = {name for name in required if name in values and values[name] is None}
        if missing:
            raise ValidationError(missing_required(entity_type, sorted(missing)))
        return values

    def _check_references(
        self,
        entity_type: str,
        values: Mapping[str, Any],
        only: Optional[Any] = None,
        entity_id: Optional[int] = None,
    ) -> None:
        """Verify belongs-to and polymorphic references resolve.

        Args:
            only: When given, only references involving these field names are checked
            entity_id: ID of the row being updated, if any

        Raises:
            ConflictError: If another Entry already wraps the payload
        """
        touched = set(values) if only is None else set(only)

        for foreign_key, owner_type in BELONGS_TO.get(entity_type, {}).items():
            owner_id = values.get(foreign_key)
            if foreign_key in touched and owner_id is not None:
                if not self.db.entity_exists(owner_type, owner_id):
                    raise ValidationError(dangling_owner(entity_type, foreign_key, owner_type, owner_id))

        if entity_type == self.entryable.envelope:
            pair = (self.entryable.type_field, self.entryable.id_field)
            if touched.intersection(pair):
                self.entryable.resolve(self.db, values[pair[0]], values[pair[1]])
                holders = self.db.list_entities(
                    entity_type, {pair[0]: values[pair[0]], pair[1]: values[pair[1]]}
                )
                if any(holder.id != entity_id for holder in holders):
                    raise ConflictError(
                        f"{values[pair[0]]} {values[pair[1]]} already has an {entity_type}"
                    )

        if entity_type == "Picture" and touched.intersection({"imageable_type", "imageable_id"}):
            tag, target_id = values.get("imageable_type"), values.get("imageable_id")
            if tag is None and target_id is None:
                return
            if tag is None or target_id is None:
                raise ValidationError("Picture needs both imageable_type and imageable_id, or neither")
            self.imageable.ensure(tag, target_id)

