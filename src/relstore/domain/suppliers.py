"""Supplier domain service."""

from typing import Optional

from relstore.domain.entities import Account, AccountHistory
from relstore.domain.errors import ConflictError
from relstore.domain.store import EntityStore


class SupplierService:
    """Service for suppliers, their account and the account's credit history."""

    def __init__(self, store: EntityStore):
        """Initialize supplier service.

        Args:
            store: EntityStore instance
        """
        self.store = store

    def create_supplier(self, name: str) -> int:
        return self.store.create("Supplier", {"name": name})

    def open_account(self, supplier_id: int, account_number: str) -> int:
        """Open the supplier's account. Returns account ID.

        Raises:
            ValidationError: If the supplier doesn't exist
            ConflictError: If the supplier already has an account
        """
        with self.store.db.transaction():
            if self.store.count("Account", supplier_id=supplier_id) > 0:
                raise ConflictError(f"Supplier {supplier_id} already has an account")
            return self.store.create(
                "Account", {"supplier_id": supplier_id, "account_number": account_number}
            )

    def record_credit_rating(self, account_id: int, credit_rating: int) -> int:
        """Append a credit history record to an account. Returns history ID."""
        return self.store.create(
            "AccountHistory", {"account_id": account_id, "credit_rating": credit_rating}
        )

    def account(self, supplier_id: int) -> Optional[Account]:
        self.store.get("Supplier", supplier_id)
        accounts = self.store.find("Account", supplier_id=supplier_id)
        return accounts[0] if accounts else None

    def account_history(self, supplier_id: int) -> Optional[AccountHistory]:
        """Credit history reached through the supplier's account.

        Returns:
            The history record, or None if the supplier has no account or the
            account has no history

        Raises:
            NotFoundError: If the supplier doesn't exist
        """
        return self.store.db.get_supplier_account_history(supplier_id)
