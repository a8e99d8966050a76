"""Association definitions and the registry the store reads them from.

An association is metadata: which entity owns which children, through which
key or join table, under which read scope, with which gates and observers.
The database turns that metadata into queries; nothing here touches storage.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional

from relstore.domain.errors import NotFoundError, unknown_association
from relstore.domain.gates import GateChain, Observer, credit_limit, log_addition, log_removal

HAS_MANY = "has_many"
THROUGH = "through"

DESTROY = "destroy"
DELETE_JOIN_ROWS = "delete_join_rows"


@dataclass
class Association:
    """One named association from an owner type to a child type.

    ``has_many`` associations keep ``foreign_key`` on the child row.
    ``through`` associations go via ``join_table``, matching ``owner_key``
    against the owner id and ``child_key`` against the child id.
    ``scope`` holds column equalities applied to every read and never to
    writes. ``dependent="destroy"`` makes the owner's delete cascade to the
    children; ``dependent="delete_join_rows"`` on a ``through`` association
    only removes the owner's join rows.
    """

    owner_type: str
    name: str
    child_type: str
    kind: str = HAS_MANY
    foreign_key: Optional[str] = None
    join_table: Optional[str] = None
    owner_key: Optional[str] = None
    child_key: Optional[str] = None
    scope: Mapping[str, Any] = field(default_factory=dict)
    dependent: Optional[str] = None
    before_add: GateChain = field(default_factory=GateChain)
    after_add: list[Observer] = field(default_factory=list)
    before_remove: GateChain = field(default_factory=GateChain)
    after_remove: list[Observer] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.kind == HAS_MANY and not self.foreign_key:
            raise ValueError(f"{self.owner_type}.{self.name}: has_many needs a foreign_key")
        if self.kind == THROUGH and not (self.join_table and self.owner_key and self.child_key):
            raise ValueError(
                f"{self.owner_type}.{self.name}: through needs join_table, owner_key and child_key"
            )

    @property
    def gated(self) -> bool:
        return len(self.before_add) > 0


class AssociationRegistry:
    """Associations keyed by (owner type, name)."""

    def __init__(self) -> None:
        self._associations: dict[tuple[str, str], Association] = {}

    def define(self, association: Association) -> Association:
        self._associations[(association.owner_type, association.name)] = association
        return association

    def get(self, owner_type: str, name: str) -> Association:
        try:
            return self._associations[(owner_type, name)]
        except KeyError:
            raise NotFoundError(unknown_association(owner_type, name))

    def __iter__(self) -> Iterator[Association]:
        return iter(self._associations.values())

    def dependents(self, owner_type: str) -> list[Association]:
        """Associations whose children are destroyed with the owner."""
        return [
            a
            for a in self._associations.values()
            if a.owner_type == owner_type and a.dependent == DESTROY
        ]

    def join_rows_of(self, owner_type: str) -> list[Association]:
        """Through associations whose join rows go away with the owner."""
        return [
            a
            for a in self._associations.values()
            if a.owner_type == owner_type and a.kind == THROUGH and a.dependent == DELETE_JOIN_ROWS
        ]

    def gated_by_foreign_key(self, child_type: str, foreign_key: str) -> Optional[Association]:
        """The gated has_many association that writing ``foreign_key`` joins, if any."""
        for a in self._associations.values():
            if (
                a.kind == HAS_MANY
                and a.child_type == child_type
                and a.foreign_key == foreign_key
                and a.gated
            ):
                return a
        return None


def default_associations(book_limit: int) -> AssociationRegistry:
    """Build the registry for the stock schema.

    Args:
        book_limit: Number of books an author may hold before additions are denied
    """
    registry = AssociationRegistry()
    registry.define(
        Association(
            "Author",
            "books",
            "Book",
            foreign_key="author_id",
            before_add=GateChain([credit_limit(book_limit)]),
            after_add=[log_addition],
            after_remove=[log_removal],
        )
    )
    registry.define(
        Association("Document", "sections", "Section", foreign_key="document_id", dependent=DESTROY)
    )
    registry.define(
        Association("Section", "paragraphs", "Paragraph", foreign_key="section_id", dependent=DESTROY)
    )
    registry.define(Association("Teacher", "students", "Student", foreign_key="teacher_id"))
    registry.define(
        Association(
            "Part",
            "assemblies",
            "Assembly",
            kind=THROUGH,
            join_table="assemblies_parts",
            owner_key="part_id",
            child_key="assembly_id",
            scope={"active": True},
            dependent=DELETE_JOIN_ROWS,
        )
    )
    registry.define(
        Association(
            "Assembly",
            "parts",
            "Part",
            kind=THROUGH,
            join_table="assemblies_parts",
            owner_key="assembly_id",
            child_key="part_id",
            dependent=DELETE_JOIN_ROWS,
        )
    )
    registry.define(
        Association(
            "Order",
            "products",
            "Product",
            kind=THROUGH,
            join_table="order_products",
            owner_key="order_id",
            child_key="product_id",
        )
    )
    registry.define(
        Association(
            "Physician",
            "patients",
            "Patient",
            kind=THROUGH,
            join_table="appointments",
            owner_key="physician_id",
            child_key="patient_id",
        )
    )
    return registry
