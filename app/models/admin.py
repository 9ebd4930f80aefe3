# app/models/admin.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field

from app.models.product import utcnow


class Admin(SQLModel, table=True):
    """
    Dashboard operator.

    Rows are provisioned directly in the database; there is no sign-up.
    """

    __tablename__ = "admin"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str | None = None
    password: str

    created_at: datetime = Field(default_factory=utcnow)
