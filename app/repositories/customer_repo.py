# app/repositories/customer_repo.py
import uuid

from sqlmodel import Session, select

from app.models.customer import Customer


class CustomerRepository:
    """
    Read-only data access for storefront customers.
    """

    def get_by_id(self, session: Session, customer_id: uuid.UUID) -> Customer | None:
        """Return a customer by primary key, or None if not found."""
        return session.get(Customer, customer_id)

    def get_many(self, session: Session, customer_ids: set[uuid.UUID]) -> dict[uuid.UUID, Customer]:
        if not customer_ids:
            return {}
        stmt = select(Customer).where(Customer.id.in_(customer_ids))
        return {c.id: c for c in session.exec(stmt).all()}

    def list_active(self, session: Session) -> list[Customer]:
        """Non-deleted customers, most recently registered first."""
        stmt = (
            select(Customer)
            .where(Customer.is_deleted == False)  # noqa: E712
            .order_by(Customer.created_date.desc())
        )
        return session.exec(stmt).all()
