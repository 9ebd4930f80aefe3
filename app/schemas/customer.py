# app/schemas/customer.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel


class CustomerRead(SQLModel):
    """Response schema returned to the dashboard."""

    id: uuid.UUID
    email: str
    phone_number: str
    address: str
    full_name: str | None = None
    city: str | None = None
    created_date: datetime
