"""Domain model entities for relstore.

These are pure data classes representing the stored records, independent of
the database schema. Every persisted entity carries its surrogate id and the
created/updated timestamps; the two join entities carry neither.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union


@dataclass(frozen=True)
class Author:
    """Book author; owns books subject to the credit limit."""

    id: int
    name: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Book:
    """Book written by an author."""

    id: int
    title: Optional[str]
    published_at: Optional[datetime]
    author_id: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Supplier:
    """External vendor with a single account."""

    id: int
    name: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Account:
    """Supplier's financial account."""

    id: int
    supplier_id: int
    account_number: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AccountHistory:
    """Credit record for an account."""

    id: int
    account_id: int
    credit_rating: Optional[int]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Document:
    id: int
    title: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Section:
    id: int
    title: Optional[str]
    document_id: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Paragraph:
    id: int
    content: Optional[str]
    section_id: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Assembly:
    """Assembly of parts; inactive assemblies are hidden from Part.assemblies."""

    id: int
    name: Optional[str]
    active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Part:
    id: int
    part_number: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Order:
    id: int
    reference: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Product:
    id: int
    name: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OrderProductKey:
    """Composite identity of an order line."""

    order_id: int
    product_id: int


@dataclass(frozen=True)
class OrdersProduct:
    """Order line keyed by (order_id, product_id); there is no surrogate id."""

    order_id: int
    product_id: int
    quantity: int

    @property
    def key(self) -> OrderProductKey:
        return OrderProductKey(self.order_id, self.product_id)


@dataclass(frozen=True)
class Message:
    id: int
    subject: Optional[str]
    body: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Comment:
    id: int
    content: Optional[str]
    created_at: datetime
    updated_at: datetime


# Closed set of payloads an Entry can wrap.
Entryable = Union[Message, Comment]


@dataclass(frozen=True)
class Entry:
    """Delegated-type envelope over one Message or Comment."""

    id: int
    entryable_type: str
    entryable_id: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Picture:
    """Image attached to any registered imageable entity."""

    id: int
    name: str
    imageable_type: Optional[str]
    imageable_id: Optional[int]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Employee:
    id: int
    name: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Teacher:
    id: int
    name: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Student:
    id: int
    name: Optional[str]
    roll_number: Optional[int]
    teacher_id: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Physician:
    id: int
    name: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Patient:
    id: int
    name: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Appointment:
    """Physician/patient visit; links the two sides of a has-many-through."""

    id: int
    physician_id: Optional[int]
    patient_id: Optional[int]
    appointment_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime
