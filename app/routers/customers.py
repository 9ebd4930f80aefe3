# app/routers/customers.py
import uuid

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.customer_repo import CustomerRepository
from app.schemas.common import Page
from app.schemas.customer import CustomerRead
from app.services.customer_service import PAGE_SIZE, CustomerService

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    dependencies=[Depends(require_admin)],
)

repo = CustomerRepository()
service = CustomerService(repo)


@router.get("", response_model=Page[CustomerRead])
def list_customers(
    session: Session = Depends(get_session),
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=PAGE_SIZE, ge=1, le=100),
):
    """
    List customers, most recent first.

    `search` matches email, phone number or address.
    """
    return service.list_customers(session, search=search, page=page, page_size=page_size)


@router.get("/{customer_id}", response_model=CustomerRead)
def get_customer(
    customer_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_customer(session, customer_id)
