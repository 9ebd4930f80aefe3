# app/routers/products.py
import uuid
from typing import Any

from fastapi import (
    APIRouter,
    Depends,
    File,
    Query,
    UploadFile,
    status,
)
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.schemas.common import Page
from app.schemas.product import (
    DiscountUpdate,
    ImageSide,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from app.services.product_service import PAGE_SIZE, ProductService

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    dependencies=[Depends(require_admin)],
)

repo = ProductRepository()
service = ProductService(repo)


@router.get("", response_model=Page[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=PAGE_SIZE, ge=1, le=100),
):
    """
    List non-deleted products, newest first.

    - `search` matches the product name (case-insensitive substring).
    """
    return service.list_products(session, search=search, page=page, page_size=page_size)


@router.get("/media", response_model=list[dict[str, Any]])
def list_product_media():
    """
    List objects stored in the products bucket (first 100).
    """
    return service.list_media()


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get a single product by id.
    """
    return service.read_product(session, product_id)


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
):
    """
    Create a new product.
    """
    return service.create_product(session, payload)


@router.patch("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: uuid.UUID,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    """
    Update an existing product.
    """
    return service.update_product(session, product_id, payload)


@router.patch("/{product_id}/discount", response_model=ProductRead)
def add_discount(
    product_id: uuid.UUID,
    payload: DiscountUpdate,
    session: Session = Depends(get_session),
):
    """
    Set the discount percentage (0 removes it).
    """
    return service.add_discount(session, product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Soft delete a product; it disappears from listings but stays stored.
    """
    service.soft_delete_product(session, product_id)
    return None


@router.post(
    "/{product_id}/images/{side}",
    response_model=ProductRead,
    summary="Upload the front or back image for a product",
)
def upload_product_image(
    product_id: uuid.UUID,
    side: ImageSide,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    """
    Upload a new image for the product.

    - Accepts any image/* type up to 5MB.
    - The previous image object is left in storage.
    """
    file_bytes = file.file.read()
    return service.set_image(
        session=session,
        product_id=product_id,
        side=side,
        content_type=file.content_type,
        filename=file.filename,
        file_bytes=file_bytes,
    )
