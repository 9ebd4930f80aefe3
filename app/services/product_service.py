# app/services/product_service.py
import logging
import uuid
from typing import Any

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.core.listing import filter_items, paginate
from app.core.query_cache import QueryCache, query_cache
from app.core.storage_utils import (
    file_extension,
    generate_filename,
    list_bucket,
    upload_to_storage,
    validate_image,
)
from app.models.product import Product, utcnow
from app.repositories.product_repo import ProductRepository
from app.schemas.common import Page
from app.schemas.product import (
    DiscountUpdate,
    ImageSide,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)

settings = get_settings()

logger = logging.getLogger(__name__)

PRODUCTS_KEY = ("products",)
PRODUCT_KEY = "product"
# Order list entries embed a snapshot of each line item's product
ORDERS_KEY = ("orders",)

PAGE_SIZE = 4
SEARCH_FIELDS = ("name",)

# Below this many units a product is flagged as running low
LOW_STOCK_THRESHOLD = 20

MEDIA_LIST_LIMIT = 100


def discounted_price(price: float, discount: float | None) -> float:
    """
    Price after a percentage discount; unchanged when discount is 0/None.
    """
    if discount and discount > 0:
        return price * (1 - discount / 100)
    return price


def stock_status(quantity: int) -> str:
    if quantity <= 0:
        return "out_of_stock"
    if quantity < LOW_STOCK_THRESHOLD:
        return "low_stock"
    return "in_stock"


class ProductService:
    """
    Business logic for products.

    Responsibilities:
      - list/search/paginate over the cached product list
      - soft deletion
      - discount updates
      - image validation + upload orchestration with Supabase
      - cache invalidation after every write
    """

    def __init__(self, repo: ProductRepository, cache: QueryCache = query_cache):
        self.repo = repo
        self.cache = cache

    # ----- Helpers -----

    @staticmethod
    def to_read(product: Product) -> ProductRead:
        return ProductRead.model_validate(
            product,
            update={
                "discounted_price": discounted_price(product.price, product.discount),
                "stock_status": stock_status(product.quantity),
            },
        )

    def _invalidate(self, product_id: uuid.UUID | None = None) -> None:
        self.cache.invalidate(*PRODUCTS_KEY)
        self.cache.invalidate(*ORDERS_KEY)
        if product_id is not None:
            self.cache.invalidate(PRODUCT_KEY, product_id)

    # ----- Queries -----

    def list_products(
        self,
        session: Session,
        search: str | None = None,
        page: int = 1,
        page_size: int = PAGE_SIZE,
    ) -> Page[ProductRead]:
        products = self.cache.get_or_fetch(
            PRODUCTS_KEY,
            lambda: [self.to_read(p) for p in self.repo.list_active(session)],
        )
        return paginate(filter_items(products, search, SEARCH_FIELDS), page, page_size)

    def get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        """
        Raises:
            HTTPException(404): missing or soft-deleted product.
        """
        product = self.repo.get_by_id(session, product_id)
        if not product or product.is_deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def read_product(self, session: Session, product_id: uuid.UUID) -> ProductRead:
        return self.cache.get_or_fetch(
            (PRODUCT_KEY, product_id),
            lambda: self.to_read(self.get_product(session, product_id)),
        )

    def list_media(self) -> list[dict[str, Any]]:
        """First page of objects stored in the products bucket."""
        return list_bucket(settings.PRODUCTS_BUCKET, limit=MEDIA_LIST_LIMIT)

    # ----- Mutations -----

    def create_product(self, session: Session, payload: ProductCreate) -> ProductRead:
        product = Product(
            **payload.model_dump(),
            discount_added=payload.discount > 0,
            is_deleted=False,
        )
        product = self.repo.create(session, product)
        self._invalidate()
        return self.to_read(product)

    def update_product(
        self,
        session: Session,
        product_id: uuid.UUID,
        payload: ProductUpdate,
    ) -> ProductRead:
        """
        Partial update of a product; only fields present in the payload
        change. Image URLs are left alone (see `set_image`).
        """
        product = self.get_product(session, product_id)

        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            setattr(product, field, value)

        if payload.discount is not None:
            product.discount_added = payload.discount > 0

        product.updated_at = utcnow()
        product = self.repo.update(session, product)
        self._invalidate(product_id)
        return self.to_read(product)

    def add_discount(
        self,
        session: Session,
        product_id: uuid.UUID,
        payload: DiscountUpdate,
    ) -> ProductRead:
        product = self.get_product(session, product_id)
        product.discount = payload.discount
        product.discount_added = payload.discount > 0
        product.updated_at = utcnow()
        product = self.repo.update(session, product)
        self._invalidate(product_id)
        return self.to_read(product)

    def soft_delete_product(self, session: Session, product_id: uuid.UUID) -> None:
        product = self.get_product(session, product_id)
        product.is_deleted = True
        product.updated_at = utcnow()
        self.repo.update(session, product)
        self._invalidate(product_id)

    # ----- Images -----

    def set_image(
        self,
        session: Session,
        product_id: uuid.UUID,
        side: ImageSide,
        content_type: str | None,
        filename: str | None,
        file_bytes: bytes,
    ) -> ProductRead:
        """
        Upload a front or back image and point the product at it.

        - Validates content type + size before touching storage.
        - Uploads under a fresh name (front-<ms>-<rand>.<ext>); the
          previous object is kept.
        """
        product = self.get_product(session, product_id)
        validate_image(content_type, file_bytes)

        ext = file_extension(filename, content_type)
        path = generate_filename(f"{side}-", ext)
        url = upload_to_storage(settings.PRODUCTS_BUCKET, path, file_bytes, content_type)
        logger.info("Uploaded %s image for product %s: %s", side, product_id, path)

        if side == "front":
            product.image = url
        else:
            product.back_image = url
        product.updated_at = utcnow()

        product = self.repo.update(session, product)
        self._invalidate(product_id)
        return self.to_read(product)
