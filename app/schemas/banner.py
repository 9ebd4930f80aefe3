# app/schemas/banner.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel


class HeroBannerRead(SQLModel):
    id: uuid.UUID
    image_url: str
    link_url: str
    brand: str | None
    category: str | None
    custom_url_added: bool
    created_at: datetime
    updated_at: datetime
