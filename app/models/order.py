# app/models/order.py
import uuid
from datetime import datetime

from sqlalchemy import Column
from sqlmodel import SQLModel, Field

from app.models.product import StringList, utcnow


class Order(SQLModel, table=True):
    """
    Customer order as placed from the storefront.

    status:
      - False: pending (or canceled, when track_id was cleared)
      - True : completed, track_id holds the shipment tracking id
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    total_amount: float = Field(
        default=0,
        description="Order total as charged to the customer",
    )

    status: bool = Field(
        default=False,
        index=True,
        description="True once accepted and shipped",
    )

    track_id: str | None = Field(
        default=None,
        description="Shipment tracking id supplied on acceptance",
    )

    is_deleted: bool = Field(default=False, index=True)

    created_at: datetime = Field(
        default_factory=utcnow,
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(default_factory=utcnow)


class OrderItem(SQLModel, table=True):
    """
    Line item inside an order.

    Keeps a snapshot of price and the chosen colour/model variants.
    """

    __tablename__ = "order_items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    order_id: uuid.UUID = Field(
        foreign_key="orders.id",
        index=True,
    )

    product_id: uuid.UUID = Field(
        foreign_key="products.id",
        index=True,
    )

    price: float = Field(
        description="Unit price at time of order",
    )

    quantity: int = Field(
        gt=0,
        description="Quantity ordered (>=1)",
    )

    colors: list[str] = Field(
        default_factory=list,
        sa_column=Column(StringList, nullable=False),
    )
    models: list[str] = Field(
        default_factory=list,
        sa_column=Column(StringList, nullable=False),
    )

    total_amount: float = Field(default=0)

    is_deleted: bool = Field(default=False, index=True)
