# app/models/banner.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field

from app.models.product import utcnow


class HeroBanner(SQLModel, table=True):
    """
    Storefront hero banner.

    The image lives in the banner bucket; `image_url` is its public URL.
    `link_url` is either operator-supplied (custom_url_added=True) or
    derived from brand/category.
    """

    __tablename__ = "hero"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    image_url: str
    link_url: str

    brand: str | None = None
    category: str | None = None
    custom_url_added: bool = Field(default=False)

    is_deleted: bool = Field(default=False, index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
