"""SQLAlchemy models for the relstore schema."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Boolean,
    Index,
    PrimaryKeyConstraint,
    Table,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TimestampMixin:
    """created_at/updated_at columns carried by every entity table."""

    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


class Author(TimestampMixin, Base):
    """Author model."""

    __tablename__ = "authors"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)


class Book(TimestampMixin, Base):
    """Book model."""

    __tablename__ = "books"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=True)
    published_at = Column(DateTime, nullable=True)
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=False, index=True)


class Supplier(TimestampMixin, Base):
    """Supplier model."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)

    # Relationships
    account = relationship("Account", back_populates="supplier", uselist=False)


class Account(TimestampMixin, Base):
    """Supplier account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)
    account_number = Column(String, nullable=True)

    # Relationships
    supplier = relationship("Supplier", back_populates="account")
    histories = relationship(
        "AccountHistory", back_populates="account", order_by="AccountHistory.id"
    )


class AccountHistory(TimestampMixin, Base):
    """Account credit history model."""

    __tablename__ = "account_histories"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    credit_rating = Column(Integer, nullable=True)

    # Relationships
    account = relationship("Account", back_populates="histories")


class Document(TimestampMixin, Base):
    """Document model."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=True)


class Section(TimestampMixin, Base):
    """Document section model."""

    __tablename__ = "sections"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False, index=True)


class Paragraph(TimestampMixin, Base):
    """Section paragraph model."""

    __tablename__ = "paragraphs"

    id = Column(Integer, primary_key=True)
    content = Column(Text, nullable=True)
    section_id = Column(Integer, ForeignKey("sections.id"), nullable=False, index=True)


# Join table with no surrogate key
assemblies_parts = Table(
    "assemblies_parts",
    Base.metadata,
    Column("assembly_id", Integer, ForeignKey("assemblies.id"), nullable=False, index=True),
    Column("part_id", Integer, ForeignKey("parts.id"), nullable=False, index=True),
    UniqueConstraint("assembly_id", "part_id", name="uq_assembly_part"),
)


class Assembly(TimestampMixin, Base):
    """Assembly model."""

    __tablename__ = "assemblies"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)
    active = Column(Boolean, default=True, nullable=False)


class Part(TimestampMixin, Base):
    """Part model."""

    __tablename__ = "parts"

    id = Column(Integer, primary_key=True)
    part_number = Column(String, nullable=True)


class Order(TimestampMixin, Base):
    """Order model."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    reference = Column(String, nullable=True)


class Product(TimestampMixin, Base):
    """Product model."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)


class OrdersProduct(Base):
    """Order line model keyed by (order_id, product_id)."""

    __tablename__ = "order_products"

    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, default=1, nullable=False)

    __table_args__ = (PrimaryKeyConstraint("order_id", "product_id", name="pk_order_products"),)


class Message(TimestampMixin, Base):
    """Message entry payload."""

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True)
    subject = Column(String, nullable=True)
    body = Column(String, nullable=True)


class Comment(TimestampMixin, Base):
    """Comment entry payload."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    content = Column(Text, nullable=True)


class Entry(TimestampMixin, Base):
    """Delegated-type entry envelope."""

    __tablename__ = "entries"

    id = Column(Integer, primary_key=True)
    entryable_type = Column(String, nullable=False)
    entryable_id = Column(Integer, nullable=False)

    __table_args__ = (Index("ix_entries_entryable", "entryable_type", "entryable_id", unique=True),)


class Picture(TimestampMixin, Base):
    """Picture attached to an imageable entity."""

    __tablename__ = "pictures"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    imageable_type = Column(String, nullable=True)
    imageable_id = Column(Integer, nullable=True)

    __table_args__ = (Index("ix_pictures_imageable", "imageable_type", "imageable_id"),)


class Employee(TimestampMixin, Base):
    """Employee model."""

    __tablename__ = "employees"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)


class Teacher(TimestampMixin, Base):
    """Teacher model."""

    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)


class Student(TimestampMixin, Base):
    """Student model."""

    __tablename__ = "students"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)
    roll_number = Column(Integer, nullable=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False, index=True)


class Physician(TimestampMixin, Base):
    """Physician model."""

    __tablename__ = "physicians"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)


class Patient(TimestampMixin, Base):
    """Patient model."""

    __tablename__ = "patients"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)


class Appointment(TimestampMixin, Base):
    """Appointment model linking physicians and patients."""

    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    physician_id = Column(Integer, ForeignKey("physicians.id"), nullable=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=True, index=True)
    appointment_date = Column(DateTime, nullable=True)


# Entity type name -> ORM model, for every table with a surrogate id
MODELS: dict[str, type] = {
    "Author": Author,
    "Book": Book,
    "Supplier": Supplier,
    "Account": Account,
    "AccountHistory": AccountHistory,
    "Document": Document,
    "Section": Section,
    "Paragraph": Paragraph,
    "Assembly": Assembly,
    "Part": Part,
    "Order": Order,
    "Product": Product,
    "Message": Message,
    "Comment": Comment,
    "Entry": Entry,
    "Picture": Picture,
    "Employee": Employee,
    "Teacher": Teacher,
    "Student": Student,
    "Physician": Physician,
    "Patient": Patient,
    "Appointment": Appointment,
}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
