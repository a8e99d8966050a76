"""Mapper functions to convert SQLAlchemy models into domain entities.

Entity tables map column-for-column onto their domain dataclass, so a single
field-driven converter serves them; the composite-key join gets its own.
"""

from dataclasses import fields
from typing import Any

from relstore.domain import entities as domain
from relstore.database.models import OrdersProduct as ORMOrdersProduct

DOMAIN_TYPES: dict[str, type] = {
    "Author": domain.Author,
    "Book": domain.Book,
    "Supplier": domain.Supplier,
    "Account": domain.Account,
    "AccountHistory": domain.AccountHistory,
    "Document": domain.Document,
    "Section": domain.Section,
    "Paragraph": domain.Paragraph,
    "Assembly": domain.Assembly,
    "Part": domain.Part,
    "Order": domain.Order,
    "Product": domain.Product,
    "Message": domain.Message,
    "Comment": domain.Comment,
    "Entry": domain.Entry,
    "Picture": domain.Picture,
    "Employee": domain.Employee,
    "Teacher": domain.Teacher,
    "Student": domain.Student,
    "Physician": domain.Physician,
    "Patient": domain.Patient,
    "Appointment": domain.Appointment,
}


def entity_to_domain(entity_type: str, orm_obj: Any) -> Any:
    """Convert a SQLAlchemy entity row to its domain dataclass."""
    domain_cls = DOMAIN_TYPES[entity_type]
    return domain_cls(**{f.name: getattr(orm_obj, f.name) for f in fields(domain_cls)})


def orders_product_to_domain(orm_line: ORMOrdersProduct) -> domain.OrdersProduct:
    """Convert SQLAlchemy OrdersProduct model to domain OrdersProduct entity."""
    return domain.OrdersProduct(
        order_id=orm_line.order_id,
        product_id=orm_line.product_id,
        quantity=orm_line.quantity,
    )
