"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from relstore.domain.entities import AccountHistory, OrdersProduct, OrderProductKey


class Database(ABC):
    """Abstract database interface for relstore.

    Every write runs inside ``transaction()``. Calls made while an outer
    transaction is open join it, so callers can compose several operations
    into one atomic unit.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Open (or join) a transaction; commit on exit, roll back on error."""
        pass

    @abstractmethod
    def lock_owner(self, entity_type: str, entity_id: int) -> AbstractContextManager[Optional[Any]]:
        """Serialize writers on one owner row for the duration of the block.

        Yields the owner entity, re-read under the lock, or None if it does
        not exist.
        """
        pass

    # Entity operations
    @abstractmethod
    def create_entity(self, entity_type: str, values: Mapping[str, Any]) -> int:
        """Insert a row. Returns its ID."""
        pass

    @abstractmethod
    def get_entity(self, entity_type: str, entity_id: int) -> Optional[Any]:
        """Get an entity by ID."""
        pass

    @abstractmethod
    def entity_exists(self, entity_type: str, entity_id: int) -> bool:
        """Check whether a row with the given ID exists."""
        pass

    @abstractmethod
    def update_entity(self, entity_type: str, entity_id: int, values: Mapping[str, Any]) -> None:
        """Update fields of an existing row."""
        pass

    @abstractmethod
    def list_entities(
        self,
        entity_type: str,
        filters: Optional[Mapping[str, Any]] = None,
        prefix: Optional[tuple[str, str]] = None,
        created_after: Optional[datetime] = None,
    ) -> list[Any]:
        """List entities ordered by ID.

        Args:
            entity_type: Entity type name
            filters: Optional column equality filters
            prefix: Optional (field, prefix) pair; keeps rows whose field starts with prefix
            created_after: Optional lower bound (exclusive) on created_at
        """
        pass

    @abstractmethod
    def count_entities(self, entity_type: str, filters: Optional[Mapping[str, Any]] = None) -> int:
        """Count entities matching column equality filters."""
        pass

    @abstractmethod
    def delete_rows(self, rows: Sequence[tuple[str, int]]) -> int:
        """Delete the given (entity_type, id) rows in order. Returns rows removed."""
        pass

    # Association reads
    @abstractmethod
    def list_related(self, association: Any, owner_id: int) -> list[Any]:
        """List children reachable from an owner through an association, scope applied."""
        pass

    @abstractmethod
    def count_related(self, association: Any, owner_id: int) -> int:
        """Count children reachable from an owner through an association, scope applied."""
        pass

    # Join table operations
    @abstractmethod
    def link_assembly_part(self, assembly_id: int, part_id: int) -> None:
        """Insert an assemblies_parts row."""
        pass

    @abstractmethod
    def assembly_part_linked(self, assembly_id: int, part_id: int) -> bool:
        """Check whether an assemblies_parts row exists."""
        pass

    @abstractmethod
    def unlink_assembly_part(self, assembly_id: int, part_id: int) -> int:
        """Delete an assemblies_parts row. Returns rows removed."""
        pass

    @abstractmethod
    def delete_join_rows(self, join_table: str, key: str, value: int) -> int:
        """Delete every row of a join table whose ``key`` column equals ``value``. Returns rows removed."""
        pass

    # Order line operations (composite key)
    @abstractmethod
    def create_order_line(self, key: OrderProductKey, quantity: int) -> None:
        """Insert an order line."""
        pass

    @abstractmethod
    def get_order_line(self, key: OrderProductKey) -> Optional[OrdersProduct]:
        """Get an order line by its (order_id, product_id) key."""
        pass

    @abstractmethod
    def update_order_line_quantity(self, key: OrderProductKey, quantity: int) -> None:
        """Set the quantity of an existing order line."""
        pass

    @abstractmethod
    def delete_order_line(self, key: OrderProductKey) -> None:
        """Delete an existing order line."""
        pass

    # Read-through associations
    @abstractmethod
    def get_supplier_account_history(self, supplier_id: int) -> Optional[AccountHistory]:
        """Get the account history reachable from a supplier through its account."""
        pass
