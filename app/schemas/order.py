# app/schemas/order.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

from app.schemas.customer import CustomerRead

StatusFilter = Literal["all", "completed", "pending"]


class OrderItemProduct(SQLModel):
    """
    Product snapshot shown next to a line item.
    """

    id: uuid.UUID
    name: str
    brand: str
    price: float
    discount: float
    colors: list[str]
    models: list[str]
    image: str | None


class OrderItemRead(SQLModel):
    """
    Representation of a single order line item.
    """

    id: uuid.UUID
    order_id: uuid.UUID
    product_id: uuid.UUID
    price: float
    quantity: int
    colors: list[str]
    models: list[str]
    total_amount: float
    product: OrderItemProduct | None


class OrderRead(SQLModel):
    """
    Lightweight representation of an order (without items).
    """

    id: uuid.UUID
    user_id: uuid.UUID
    total_amount: float
    status: bool
    track_id: str | None
    created_at: datetime
    updated_at: datetime


class OrderWithItemsRead(OrderRead):
    """
    Full order view including customer and items.
    """

    customer: CustomerRead | None
    items: list[OrderItemRead]


class OrderAccept(SQLModel):
    """
    Admin payload to accept an order.
    """

    model_config = ConfigDict(extra="forbid")

    track_id: str

    @field_validator("track_id")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("track_id cannot be empty")
        return v


class StockChange(SQLModel):
    product_id: uuid.UUID
    quantity: int


class OrderAcceptResult(SQLModel):
    """
    Accepted order plus the new stock level of every touched product.
    """

    order: OrderRead
    updated_products: list[StockChange]
