# app/schemas/product.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

StockStatus = Literal["out_of_stock", "low_stock", "in_stock"]
ImageSide = Literal["front", "back"]


def _clean_variants(v: list[str] | None) -> list[str] | None:
    """Strip entries and drop blanks (custom model inputs may be empty)."""
    if v is None:
        return v
    return [s.strip() for s in v if s and s.strip()]


class ProductCreate(SQLModel):
    """
    Payload for creating a product.

    Images are uploaded afterwards through the image endpoint; URLs may
    also be passed directly when they already exist in storage.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    price: float = Field(ge=0)
    description: str = ""
    quantity: int = Field(default=0, ge=0)
    category: str = Field(default="", max_length=100)
    brand: str = Field(default="", max_length=100)
    models: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    image: str | None = None
    back_image: str | None = None
    discount: float = Field(default=0, ge=0, le=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("category", "brand")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("models", "colors")
    @classmethod
    def clean_variants(cls, v: list[str]) -> list[str]:
        return _clean_variants(v)


class ProductUpdate(SQLModel):
    """
    Partial update payload for products.
    All fields are optional; image URLs change only through uploads.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    price: float | None = Field(default=None, ge=0)
    description: str | None = None
    quantity: int | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, max_length=100)
    brand: str | None = Field(default=None, max_length=100)
    models: list[str] | None = None
    colors: list[str] | None = None
    discount: float | None = Field(default=None, ge=0, le=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("category", "brand")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v

    @field_validator("models", "colors")
    @classmethod
    def clean_variants(cls, v: list[str] | None) -> list[str] | None:
        return _clean_variants(v)


class DiscountUpdate(SQLModel):
    """
    Discount percentage for a product; 0 removes the discount.
    """

    model_config = ConfigDict(extra="forbid")

    discount: float = Field(ge=0, le=100)


class ProductRead(SQLModel):
    """
    Product representation for the dashboard.

    `discounted_price` and `stock_status` are derived, not stored.
    """

    id: uuid.UUID
    name: str
    price: float
    description: str
    quantity: int
    category: str
    brand: str
    models: list[str]
    colors: list[str]
    image: str | None
    back_image: str | None
    discount: float
    discount_added: bool
    created_at: datetime
    updated_at: datetime

    discounted_price: float
    stock_status: StockStatus
