"""SQLAlchemy models for the Nibash marketplace.

These declarations are the schema of record (``cli.py create-tables`` and the
integration tests build tables from them). Request handling itself issues
parameterized SQL through ``core.database.Database``, so every default a
write relies on is a server default.
"""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from core.database import Base

VENDOR_TYPES = ("seller", "service", "both")
VERIFICATION_STATUSES = ("none", "pending", "approved", "rejected")


def _in_clause(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({quoted})"


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamp columns.

    ``updated_at`` is refreshed explicitly by UPDATE statements.
    """

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )


class Vendor(TimestampMixin, Base):
    """A seller or service provider."""

    __tablename__ = "vendors"
    __table_args__ = (
        CheckConstraint(
            _in_clause("vendor_type", VENDOR_TYPES), name="ck_vendors_vendor_type"
        ),
        CheckConstraint(
            _in_clause("verification_status", VERIFICATION_STATUSES),
            name="ck_vendors_verification_status",
        ),
        UniqueConstraint("vendor_email", name="uq_vendors_vendor_email"),
    )

    vendor_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vendor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    vendor_email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    logo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    vendor_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    whatsapp_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    service_radius_km: Mapped[int] = mapped_column(
        Integer, server_default=text("5"), nullable=False
    )
    visiting_card_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    shop_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    vendor_type: Mapped[str] = mapped_column(
        String(20), server_default=text("'seller'"), nullable=False
    )
    job_type: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    # JSON-encoded list, see core.json_columns
    service_locations: Mapped[str | None] = mapped_column(Text, nullable=True)
    verification_status: Mapped[str] = mapped_column(
        String(20), server_default=text("'none'"), nullable=False
    )
    verification_requested_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    # JSON-encoded object with the four document fields
    verification_documents: Mapped[str | None] = mapped_column(Text, nullable=True)


class Product(TimestampMixin, Base):
    __tablename__ = "products"
    __table_args__ = (
        Index("ix_products_vendor_created", "vendor_id", "created_at"),
    )

    product_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    vendor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("vendors.vendor_id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price_bdt: Mapped[float | None] = mapped_column(Numeric(12, 2), nullable=True)
    category_slug: Mapped[str | None] = mapped_column(
        String(100), nullable=True, index=True
    )
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)


class Service(TimestampMixin, Base):
    __tablename__ = "services"
    __table_args__ = (
        Index("ix_services_vendor_created", "vendor_id", "created_at"),
    )

    service_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    vendor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("vendors.vendor_id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    rate_bdt: Mapped[float | None] = mapped_column(Numeric(12, 2), nullable=True)
    service_category_slug: Mapped[str | None] = mapped_column(
        String(100), nullable=True, index=True
    )
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)


class Customer(TimestampMixin, Base):
    __tablename__ = "customers"
    __table_args__ = (UniqueConstraint("email", name="uq_customers_email"),)

    customer_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)


class Rating(TimestampMixin, Base):
    """A customer's 1-5 score for exactly one vendor or one product."""

    __tablename__ = "ratings"
    __table_args__ = (
        CheckConstraint("score BETWEEN 1 AND 5", name="ck_ratings_score"),
        CheckConstraint(
            "(vendor_id IS NULL) <> (product_id IS NULL)",
            name="ck_ratings_single_target",
        ),
        UniqueConstraint("customer_id", "vendor_id", name="uq_ratings_customer_vendor"),
        UniqueConstraint(
            "customer_id", "product_id", name="uq_ratings_customer_product"
        ),
    )

    rating_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("customers.customer_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    vendor_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("vendors.vendor_id", ondelete="CASCADE"), nullable=True
    )
    product_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("products.product_id", ondelete="CASCADE"), nullable=True
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
