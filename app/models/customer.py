# app/models/customer.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field

from app.models.product import utcnow


class Customer(SQLModel, table=True):
    """
    Storefront customer profile.

    Rows are written by the storefront; the admin API only reads them.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(index=True)
    phone_number: str = Field(default="")
    address: str = Field(default="")

    full_name: str | None = None
    city: str | None = None

    created_date: datetime = Field(default_factory=utcnow)

    is_deleted: bool = Field(default=False, index=True)
