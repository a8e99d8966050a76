"""Order domain service: order lines keyed by (order_id, product_id)."""

from typing import Optional

from relstore.domain.entities import OrderProductKey, OrdersProduct, Product
from relstore.domain.errors import NotFoundError, ValidationError, dangling_owner, not_found
from relstore.domain.store import EntityStore


class OrderService:
    """Service for orders, products and the order lines between them.

    Order lines have no surrogate id; every lookup, update and delete is
    addressed by the full (order_id, product_id) pair.
    """

    def __init__(self, store: EntityStore):
        """Initialize order service.

        Args:
            store: EntityStore instance
        """
        self.store = store
        self.db = store.db

    def create_order(self, reference: Optional[str] = None) -> int:
        return self.store.create("Order", {"reference": reference})

    def create_product(self, name: str) -> int:
        return self.store.create("Product", {"name": name})

    def add_product(self, order_id: int, product_id: int, quantity: int = 1) -> OrderProductKey:
        """Add a product to an order.

        Args:
            order_id: Order ID
            product_id: Product ID
            quantity: Units ordered (at least 1)

        Returns:
            Key of the new order line

        Raises:
            ValidationError: If quantity is below 1 or the order/product doesn't exist
            ConflictError: If the order already has a line for this product
        """
        _check_quantity(quantity)
        key = OrderProductKey(order_id, product_id)
        with self.db.transaction():
            if not self.db.entity_exists("Order", order_id):
                raise ValidationError(dangling_owner("OrdersProduct", "order_id", "Order", order_id))
            if not self.db.entity_exists("Product", product_id):
                raise ValidationError(
                    dangling_owner("OrdersProduct", "product_id", "Product", product_id)
                )
            self.db.create_order_line(key, quantity)
        return key

    def get_join(self, order_id: int, product_id: int) -> OrdersProduct:
        """Get the order line for a pair.

        Raises:
            NotFoundError: If no such line exists
        """
        line = self.db.get_order_line(OrderProductKey(order_id, product_id))
        if line is None:
            raise NotFoundError(not_found("OrdersProduct", (order_id, product_id)))
        return line

    def set_quantity(self, order_id: int, product_id: int, quantity: int) -> None:
        """Set the quantity of an order line.

        Raises:
            ValidationError: If quantity is below 1
            NotFoundError: If no such line exists
        """
        _check_quantity(quantity)
        self.db.update_order_line_quantity(OrderProductKey(order_id, product_id), quantity)

    def delete_join(self, order_id: int, product_id: int) -> None:
        """Delete an order line.

        Raises:
            NotFoundError: If no such line exists
        """
        self.db.delete_order_line(OrderProductKey(order_id, product_id))

    def products(self, order_id: int) -> list[Product]:
        """Products on an order, read through its order lines."""
        return self.store.associated("Order", order_id, "products")


def _check_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(f"Quantity must be an integer, got {quantity!r}")
    if quantity < 1:
        raise ValidationError(f"Quantity must be at least 1, got {quantity}")
