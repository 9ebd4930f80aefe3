# app/services/customer_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.listing import filter_items, paginate
from app.core.query_cache import QueryCache, query_cache
from app.repositories.customer_repo import CustomerRepository
from app.schemas.common import Page
from app.schemas.customer import CustomerRead

CUSTOMERS_KEY = ("customers",)

PAGE_SIZE = 4
SEARCH_FIELDS = ("email", "phone_number", "address")


class CustomerService:
    """
    Read-only customer directory for the dashboard.
    """

    def __init__(self, repo: CustomerRepository, cache: QueryCache = query_cache):
        self.repo = repo
        self.cache = cache

    def list_customers(
        self,
        session: Session,
        search: str | None = None,
        page: int = 1,
        page_size: int = PAGE_SIZE,
    ) -> Page[CustomerRead]:
        customers = self.cache.get_or_fetch(
            CUSTOMERS_KEY,
            lambda: [CustomerRead.model_validate(c) for c in self.repo.list_active(session)],
        )
        return paginate(filter_items(customers, search, SEARCH_FIELDS), page, page_size)

    def get_customer(self, session: Session, customer_id: uuid.UUID) -> CustomerRead:
        """
        Raises:
            HTTPException(404): missing or soft-deleted customer.
        """
        customer = self.repo.get_by_id(session, customer_id)
        if not customer or customer.is_deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Customer not found",
            )
        return CustomerRead.model_validate(customer)
