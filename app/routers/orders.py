# app/routers/orders.py
import uuid

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.customer_repo import CustomerRepository
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.common import Page
from app.schemas.order import (
    OrderAccept,
    OrderAcceptResult,
    OrderRead,
    OrderWithItemsRead,
    StatusFilter,
)
from app.services.order_service import PAGE_SIZE, OrderService

router = APIRouter(
    prefix="/orders",
    tags=["Orders"],
    dependencies=[Depends(require_admin)],
)

order_repo = OrderRepository()
product_repo = ProductRepository()
customer_repo = CustomerRepository()
service = OrderService(order_repo, product_repo, customer_repo)


@router.get("", response_model=Page[OrderWithItemsRead])
def list_orders(
    session: Session = Depends(get_session),
    status: StatusFilter = "all",
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=PAGE_SIZE, ge=1, le=100),
):
    """
    List orders with customer and items, newest first.

    - `status`: all | completed | pending
    - `search` matches order id, customer email or track id.
    """
    return service.list_orders(
        session,
        status_filter=status,
        search=search,
        page=page,
        page_size=page_size,
    )


@router.get("/{order_id}", response_model=OrderWithItemsRead)
def get_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get one order with customer and items.
    """
    return service.get_order(session, order_id)


@router.post("/{order_id}/accept", response_model=OrderAcceptResult)
def accept_order(
    order_id: uuid.UUID,
    payload: OrderAccept,
    session: Session = Depends(get_session),
):
    """
    Accept an order: deduct stock for every item, then mark it completed
    with the shipment tracking id.
    """
    return service.accept_order(session, order_id, payload)


@router.post("/{order_id}/cancel", response_model=OrderRead)
def cancel_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Cancel an order and clear its tracking id.
    """
    return service.cancel_order(session, order_id)
