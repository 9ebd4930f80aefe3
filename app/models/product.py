# app/models/product.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, JSON, String
from sqlalchemy.dialects.postgresql import ARRAY
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Postgres text[] columns; SQLite has no arrays, so local runs store JSON
StringList = ARRAY(String).with_variant(JSON(), "sqlite")


class Product(SQLModel, table=True):
    """
    Catalog entry managed from the admin dashboard.

    Products are never hard-deleted: `is_deleted` hides them from every
    listing while the row (and its images) stay in place.
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=255,
        index=True,
        description="Display name of the product",
    )

    price: float = Field(
        ge=0,
        description="Unit price (LKR)",
    )

    description: str = Field(
        default="",
        description="Long description shown on the storefront",
    )

    quantity: int = Field(
        default=0,
        description="Units currently in stock",
    )

    category: str = Field(
        default="",
        max_length=100,
        index=True,
    )

    brand: str = Field(
        default="",
        max_length=100,
        index=True,
    )

    # Compatible phone models / colour variants offered for this product
    models: list[str] = Field(
        default_factory=list,
        sa_column=Column(StringList, nullable=False),
    )
    colors: list[str] = Field(
        default_factory=list,
        sa_column=Column(StringList, nullable=False),
    )

    image: str | None = Field(
        default=None,
        description="Public URL of the front image",
    )
    back_image: str | None = Field(
        default=None,
        description="Public URL of the back image",
    )

    # Percentage off, 0 = no discount
    discount: float = Field(default=0, ge=0, le=100)
    discount_added: bool = Field(default=False)

    is_deleted: bool = Field(default=False, index=True)

    created_at: datetime = Field(
        default_factory=utcnow,
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(default_factory=utcnow)
